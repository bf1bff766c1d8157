"""Sequential processing pipeline: parse, transform, compile."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping

from markdown_confluence_sync.errors import StepExecutionError
from markdown_confluence_sync.plugins import plugin_name

logger = logging.getLogger(__name__)

Transformer = Callable[[Any, "ProcessingFile"], Any]
Plugin = Callable[[Mapping[str, Any]], Any]


@dataclass
class ProcessingFile:
    """State carried through a single ``process`` run."""

    value: str
    data: dict[str, Any] = field(default_factory=dict)
    result: Any = None


class Compiler:
    """Turns the final tree into the pipeline's output.

    A plugin that returns a ``Compiler`` from its attacher replaces the
    processor's compiler instead of adding a transformer.
    """

    name = "compiler"

    def compile(self, tree: Any, file: ProcessingFile) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Step:
    """A transformer together with the plugin name it came from."""

    name: str
    transformer: Transformer


@dataclass(frozen=True)
class Processor:
    """Immutable pipeline description.

    ``use`` never mutates the processor; it returns a new one with the step
    appended, so building a pipeline is a fold over plugin entries.
    """

    parser: Callable[[str], Any]
    steps: tuple[Step, ...] = ()
    compiler: Compiler | None = None

    def use(self, plugin: Plugin, options: Mapping[str, Any] | None = None) -> Processor:
        """Attach a plugin and return the extended processor."""
        name = plugin_name(plugin)
        attached = plugin(dict(options or {}))

        if isinstance(attached, Compiler):
            logger.debug(f"Using compiler from plugin '{name}'")
            return replace(self, compiler=attached)
        if attached is None:
            return self
        if not callable(attached):
            raise TypeError(
                f"Plugin '{name}' must return a transformer, a Compiler or None, "
                f"got {type(attached).__name__}"
            )
        return replace(self, steps=self.steps + (Step(name, attached),))

    def run(self, tree: Any, file: ProcessingFile) -> Any:
        """Run every transformer over ``tree`` in registration order."""
        for step in self.steps:
            logger.debug(f"Running step: {step.name}")
            try:
                result = step.transformer(tree, file)
            except Exception as e:
                logger.error(f"Step '{step.name}' failed: {e}")
                raise StepExecutionError(step.name, e) from e
            if result is not None:
                tree = result
        return tree

    def process(self, value: str) -> ProcessingFile:
        """Parse ``value``, run the steps and compile the result."""
        file = ProcessingFile(value=value)
        tree = self.run(self.parser(value), file)

        if self.compiler is None:
            file.result = tree
        else:
            file.result = self.compiler.compile(tree, file)
        return file
