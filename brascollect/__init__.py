"""DCS record serializers and file writers, PPPoE decoding, CPE and STB report detection, and frame dispatch for a BRAS traffic collector."""

__version__ = "1.0.0"