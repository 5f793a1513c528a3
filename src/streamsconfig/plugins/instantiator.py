# src/streamsconfig/plugins/instantiator.py
"""Build and configure user-pluggable classes.

Pluggable slots (key serde, value serde, timestamp extractor) are named in
configuration by class or dotted path. Building one is all-or-nothing:
the class is resolved, constructed with no arguments, and configured; only
then is the instance handed out. Any failure along the way is reported as
SerdeInstantiationError naming the slot and the class, with the original
exception chained as the cause.

Resolution is deferred to first use (see LazyInstance) so that a broken
serde does not prevent building a configuration that never uses it.
"""

import inspect
import threading
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from streamsconfig.contracts.enums import PluggableRole
from streamsconfig.contracts.errors import SerdeInstantiationError
from streamsconfig.core.coercion import qualified_name, resolve_class
from streamsconfig.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_SERDE_ROLES = frozenset({PluggableRole.KEY_SERDE, PluggableRole.VALUE_SERDE})


def instantiate(cls_or_name: type | str, role: PluggableRole, configs: Mapping[str, Any]) -> Any:
    """Construct and configure a pluggable class.

    Serdes get configure(configs, is_key) with is_key True only for the key
    serde. Timestamp extractors get configure(configs) when they define it.

    Args:
        cls_or_name: Class object or dotted path
        role: Slot being filled (selects the configure signature)
        configs: Settings passed to the configure hook (copied first)

    Returns:
        The fully configured instance

    Raises:
        SerdeInstantiationError: If loading, construction, or configuration fails
    """
    class_name = qualified_name(cls_or_name) if inspect.isclass(cls_or_name) else str(cls_or_name)
    settings = dict(configs)

    try:
        cls = cls_or_name if inspect.isclass(cls_or_name) else resolve_class(str(cls_or_name))
        instance = cls()
        if role in _SERDE_ROLES:
            instance.configure(settings, role is PluggableRole.KEY_SERDE)
        else:
            # Extractors are not required to be configurable.
            configure = getattr(instance, "configure", None)
            if configure is not None:
                configure(settings)
    except Exception as e:
        raise SerdeInstantiationError(role, class_name) from e

    logger.debug("Pluggable class configured", role=role.value, class_name=class_name)
    return instance


class LazyInstance(Generic[T]):
    """Memoized result of a factory, built on first get().

    Successful results are cached; failures are not, so every get() after a
    failure retries the factory and raises again. A lock makes concurrent
    first calls build the instance exactly once.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._value: T | None = None
        self._built = False

    @property
    def built(self) -> bool:
        return self._built

    def get(self) -> T:
        with self._lock:
            if not self._built:
                self._value = self._factory()
                self._built = True
            return self._value  # type: ignore[return-value]
