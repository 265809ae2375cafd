from .beans import BeanMeta, discover_beans, get_bean_meta, import_modules, provider_bean
from .resolver import ProviderResolver, ResolutionError, TypeResolver, contract_types

__all__ = [
    "BeanMeta",
    "ProviderResolver",
    "ResolutionError",
    "TypeResolver",
    "contract_types",
    "discover_beans",
    "get_bean_meta",
    "import_modules",
    "provider_bean",
]
