import copy
from collections.abc import Callable
from typing import Any

DEFAULT_DETECT_CYCLES = True
"""Turn re-entrant resolution of the same key into ``WonderboxCircularDependencyError``."""

DEFAULT_CLONE: Callable[[Any], Any] = copy.deepcopy
"""Duplicate clone-registered values so resolved instances never share state."""

DEFAULT_STRICT_GENERATION = False
"""Report ``resolve_dependencies`` diagnostics as warnings instead of raising."""
