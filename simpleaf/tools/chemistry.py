chemistry_dict = {
    "10xv2": {
        "salmon_flag": "--chromium",
        "permit_list": "10x_v2_permit.txt",
        "url": "https://umd.box.com/shared/static/jbs2wszgbj7k4ic2hass9ts6nhqkwq1p",
    },
    "10xv3": {
        "salmon_flag": "--chromiumV3",
        "permit_list": "10x_v3_permit.txt",
        "url": "https://umd.box.com/shared/static/eo0qlkfqf2v24ws6dfnxty6gqk1otf2h",
    },
}


class Chemistry:
    """
    A registered chemistry (10xv2, 10xv3) or any other chemistry name salmon understands.
    """

    def __init__(self, name):
        self.name = name

    @property
    def is_registered(self):
        return self.name in chemistry_dict

    @property
    def salmon_flag(self):
        """
        >>> Chemistry('10xv3').salmon_flag
        '--chromiumV3'
        >>> Chemistry('dropseq').salmon_flag
        '--dropseq'
        """
        if self.is_registered:
            return chemistry_dict[self.name]["salmon_flag"]
        return f"--{self.name}"

    @property
    def permit_list(self):
        """permit list file name, None if the chemistry is not registered"""
        if self.is_registered:
            return chemistry_dict[self.name]["permit_list"]
        return None

    @property
    def url(self):
        if self.is_registered:
            return chemistry_dict[self.name]["url"]
        return None

    def __eq__(self, other):
        return isinstance(other, Chemistry) and self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return f"Chemistry({self.name!r})"
