"""Triangle mesh domains with typed data layers, and muon cross-section and Coulomb scattering helpers."""

__version__ = "0.1.0"
__all__ = ["layers", "domain", "dcs", "coulomb"]