"""FarmLedger: provenance registry for certified farms, chickens and eggs."""

__version__ = "1.0.0"
