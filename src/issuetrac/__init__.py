"""IssueTrac - issue tracker with a status lifecycle and one-way archival"""

__version__ = "0.1.0"
