import importlib

mod = "jsonscheck"
class LazyLoader:
    """
    Lazy loader for the jsonscheck functions to keep package import cheap.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, attr_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, attr_name)
        if item.startswith('__'):
            raise AttributeError(item)
        return self._load_module(f"{mod}.{item}")

# Define the public names and their corresponding module paths
_mappings = {
    "run_validators": (f"{mod}.validators", "run_validators"),
    "is_valid": (f"{mod}.validators", "is_valid"),
    "descend": (f"{mod}.validators", "descend"),
    "get_validator": (f"{mod}.validators", "get_validator"),
    "ValidationError": (f"{mod}.validators", "ValidationError"),
    "SchemaValidator": (f"{mod}.validators", "SchemaValidator"),
    "validate_json_against_schema": (f"{mod}.validators", "validate_json_against_schema"),
    "values_equal": (f"{mod}.equality", "values_equal"),
    "value_hash": (f"{mod}.equality", "value_hash"),
    "PatternError": (f"{mod}.patterns", "PatternError"),
    "RegexErrorKind": (f"{mod}.patterns", "RegexErrorKind"),
    "ValidationResult": (f"{mod}.validate", "ValidationResult"),
    "validate_instance": (f"{mod}.validate", "validate_instance"),
    "validate_file": (f"{mod}.validate", "validate_file"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
