"""Partner definitions. Each module exposes DEFINITION and builder()."""

from . import sovrn, sovrn_xsp, verizon_media

__all__ = ["sovrn", "sovrn_xsp", "verizon_media"]
