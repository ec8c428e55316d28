"""K&M Events checkout: orders, the vendor widget, verification and plan gating."""

__version__ = "1.0.0"
