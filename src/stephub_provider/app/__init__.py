from .cli import run
from .runtime import ProviderRuntime, build_log_sink, build_runtime

__all__ = ["ProviderRuntime", "build_log_sink", "build_runtime", "run"]
