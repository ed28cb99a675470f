from sweetkicks_core.config import CoreConfig, load_core_config
from sweetkicks_core.home import SweetKicksPaths, ensure_sweetkicks_layout, resolve_sweetkicks_home

__version__ = "0.1.0"

__all__ = [
    "CoreConfig",
    "SweetKicksPaths",
    "__version__",
    "ensure_sweetkicks_layout",
    "load_core_config",
    "resolve_sweetkicks_home",
]
