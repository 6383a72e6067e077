# index
REF_DIR = "ref"
INDEX_DIR = "index"
INDEX_INFO_FILE = "index_info.json"
# pyroe writes splici_fl{flank}.fa where flank = read length - 5
FLANK_TRIM = 5

# quant
MAP_OUTPUT_DIR = "af_map"
QUANT_OUTPUT_DIR = "af_quant"
MIN_READS_DEFAULT = 10

# permit list cache
ALEVIN_FRY_HOME_ENV = "ALEVIN_FRY_HOME"
PERMIT_LIST_DIR = "plist"

# tool name: (environment variable, executable name, accepted version range)
REQUIRED_PROGS = {
    "salmon": ("SALMON", "salmon", ">=1.5.1, <2.0.0"),
    "alevin_fry": ("ALEVIN_FRY", "alevin-fry", ">=0.4.1, <1.0.0"),
    "pyroe": ("PYROE", "pyroe", ">=0.6.2, <1.0.0"),
}
