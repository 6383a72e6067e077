"""
Entry point for `python -m simpleaf`.
"""
from simpleaf.simpleaf import main

if __name__ == "__main__":
    main()
