from itemoptions.options.arena import OptionRowArena
from itemoptions.options.binder import OptionFieldBinder, OptionFieldConfig
from itemoptions.options.definition import OptionConfig, OptionDefinition, Value
from itemoptions.options.host import HostAdapter, ItemWithOptions
from itemoptions.options.index import OptionIndex, build_index
from itemoptions.options.reconciler import ReconcileResult, Reconciler
from itemoptions.options.registry import DefinitionRegistry

__all__ = [
    "DefinitionRegistry",
    "HostAdapter",
    "ItemWithOptions",
    "OptionConfig",
    "OptionDefinition",
    "OptionFieldBinder",
    "OptionFieldConfig",
    "OptionIndex",
    "OptionRowArena",
    "ReconcileResult",
    "Reconciler",
    "Value",
    "build_index",
]
