"""Route blueprints exposed via Flask."""

from .projects import project_bp
from .nfts import nft_bp
from .users import user_bp
from .marketplace import marketplace_bp
from .health import health_bp

__all__ = [
    "project_bp",
    "nft_bp",
    "user_bp",
    "marketplace_bp",
    "health_bp",
]
