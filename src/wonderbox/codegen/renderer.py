from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from jinja2 import Environment, StrictUndefined

from wonderbox.codegen.planner import AutoresolvePlan
from wonderbox.codegen.templates import AUTORESOLVE_TEMPLATE

_GENERATOR_SOURCE = "wonderbox.codegen.renderer.AutoresolveTemplateRenderer.get_autoresolve_code"
logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _RenderedDependency:
    variable: str
    key_global: str


@dataclass(frozen=True, slots=True)
class GeneratedAutoresolve:
    """Compiled ``autoresolve`` function together with the source it came from."""

    function: Callable[..., Any]
    source: str


class AutoresolveTemplateRenderer:
    """Renderer for generated ``autoresolve`` implementations."""

    def __init__(self) -> None:
        self._env = Environment(
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._autoresolve_template = self._env.from_string(AUTORESOLVE_TEMPLATE)

    def get_autoresolve_code(self, plan: AutoresolvePlan) -> str:
        """Render the source of ``autoresolve`` for a planned class.

        Dependency keys are referenced through ``_DEPENDENCY_<index>`` globals
        supplied by ``build_autoresolve``.

        Args:
            plan: Constructor plan produced by ``AutoresolvePlanner``.

        """
        dependencies = [
            _RenderedDependency(
                variable=f"dependency_{index}",
                key_global=self._key_global_name(index),
            )
            for index in range(len(plan.dependencies))
        ]
        positional_arguments = [
            rendered.variable
            for rendered, dependency in zip(dependencies, plan.dependencies, strict=True)
            if not dependency.is_keyword_only
        ]
        keyword_arguments = [
            f"{dependency.name}={rendered.variable}"
            for rendered, dependency in zip(dependencies, plan.dependencies, strict=True)
            if dependency.is_keyword_only
        ]
        call_target = "cls" if plan.uses_init else f"cls.{plan.constructor_name}"

        return self._autoresolve_template.render(
            generator=_GENERATOR_SOURCE,
            qualname=plan.owner.__qualname__,
            constructor_name=plan.constructor_name,
            dependencies=dependencies,
            call_target=call_target,
            arguments=", ".join([*positional_arguments, *keyword_arguments]),
        )

    def build_autoresolve(self, plan: AutoresolvePlan) -> GeneratedAutoresolve:
        """Render and compile ``autoresolve`` for a planned class.

        Args:
            plan: Constructor plan produced by ``AutoresolvePlanner``.

        """
        code = self.get_autoresolve_code(plan)
        namespace: dict[str, Any] = {
            self._key_global_name(index): dependency.provides
            for index, dependency in enumerate(plan.dependencies)
        }
        filename = f"<wonderbox autoresolve {plan.owner.__module__}.{plan.owner.__qualname__}>"
        exec(compile(code, filename, "exec"), namespace)  # noqa: S102

        logger.info(
            "Generated autoresolve for %s.%s with %d dependencies:\n%s",
            plan.owner.__qualname__,
            plan.constructor_name,
            len(plan.dependencies),
            code,
        )
        return GeneratedAutoresolve(function=namespace["autoresolve"], source=code)

    def _key_global_name(self, index: int) -> str:
        return f"_DEPENDENCY_{index}"
