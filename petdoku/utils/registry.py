import importlib
import traceback
from typing import Any, Dict, Optional, Type

from petdoku.utils.log import get_logger


class Registry(object):
    """A name -> class registry for pluggable strategies."""

    def __init__(self, name: str, default_mapping: Optional[Dict[str, str]] = None):
        """
        Args:
            name (`str`): The name of the registry.
            default_mapping (`dict`): Built-in keys mapped to dotted class paths,
                imported on first lookup.
        """
        self._name = name
        self._modules: Dict[str, Type] = {}
        self._default_mapping = dict(default_mapping or {})
        self.logger = get_logger(__name__)

    @property
    def name(self) -> str:
        return self._name

    @property
    def modules(self) -> dict:
        """Modules registered or imported so far."""
        return self._modules

    def keys(self):
        """All keys resolvable without a dotted path."""
        return sorted(set(self._modules) | set(self._default_mapping))

    def __contains__(self, module_key) -> bool:
        return module_key in self._modules or module_key in self._default_mapping

    def get(self, module_key) -> Any:
        """
        Get the module named `module_key`. Built-in keys are imported lazily
        from the default mapping; a dotted `package.module.ClassName` key is
        imported and registered under that key.

        Args:
            module_key (`str`): specified module name

        Returns:
            `Any`: the module object, or None for an empty key
        """
        module = self._modules.get(module_key, None)
        if module is not None:
            return module
        if module_key in self._default_mapping:
            module = self._import(self._default_mapping[module_key])
            self._register_module(module_name=module_key, module_cls=module)
        elif isinstance(module_key, str) and "." in module_key:
            module = self._import(module_key)
            self._register_module(module_name=module_key, module_cls=module)
        elif module_key is None:
            self.logger.info("Empty module key, return None")
            return None
        else:
            raise ValueError(f"Invalid module key for {self._name}: {module_key}")
        return module

    def _import(self, dotted_path: str) -> Type:
        module_path, class_name = dotted_path.rsplit(".", 1)
        try:
            module = importlib.import_module(module_path)
            return getattr(module, class_name)
        except Exception:
            self.logger.error(
                f"Failed to dynamically import {class_name} from {module_path}:\n"
                + traceback.format_exc()
            )
            raise ImportError(f"Cannot dynamically import {class_name} from {module_path}")

    def _register_module(self, module_name=None, module_cls=None, force=False):
        if module_name is None:
            module_name = module_cls.__name__

        if module_name in self._modules and not force:
            self.logger.warning(
                f"{module_name} is already registered in {self._name}, "
                f"if you want to override it, please set force=True."
            )
            raise KeyError(f"{module_name} is already registered in {self._name}")

        self._modules[module_name] = module_cls
        module_cls._name = module_name

    def register_module(self, module_name: str, module_cls: Type = None, force=False):
        """
        Register a class under `module_name`, directly or as a decorator.

        Example:

            .. code-block:: python

                @PUZZLE_DERIVERS.register_module("corner_removal")
                class CornerRemovalDeriver(PuzzleDeriver):
                    ...
        """
        if not (module_name is None or isinstance(module_name, str)):
            raise TypeError(f"module_name must be either of None, str, got {type(module_name)}")
        if module_cls is not None:
            self._register_module(module_name=module_name, module_cls=module_cls, force=force)
            return module_cls

        def _register(module_cls):
            self._register_module(module_name=module_name, module_cls=module_cls, force=force)
            return module_cls

        return _register
