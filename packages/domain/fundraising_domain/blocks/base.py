"""Base classes for computation blocks.

This module provides the foundation for the blocks architecture:
- Block abstract base class
- BlockContext for passing data between blocks
- BlockExecutor for dependency resolution and execution
- Topological sort for DAG execution order
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field


# =============================================================================
# Block Context
# =============================================================================

@dataclass
class BlockContext:
    """Keyed store that blocks read inputs from and write outputs to.

    Example:
        context = BlockContext()
        context.set("allocation_report", report)

        AllocationBlock().execute(context)

        by_investor_df = context.get("allocation_by_investor")
    """

    _data: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        """Get value from context.

        Raises:
            KeyError: If key not found in context
        """
        if key not in self._data:
            raise KeyError(f"Key '{key}' not found in context. Available keys: {list(self._data.keys())}")
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> List[str]:
        return list(self._data.keys())


# =============================================================================
# Block Base Class
# =============================================================================

class Block(ABC):
    """Abstract base class for computation blocks.

    A Block declares the context keys it reads (inputs) and writes (outputs)
    and implements the computation in execute(). Declared keys let the
    executor order blocks without the caller wiring them by hand.

    Subclass example:
        class AllocationBlock(Block):
            def __init__(self, report_key: str = "allocation_report"):
                self.report_key = report_key

            def inputs(self) -> List[str]:
                return [self.report_key]

            def outputs(self) -> List[str]:
                return ["allocation_by_investor", "allocation_summary"]

            def execute(self, context: BlockContext) -> None:
                report = context.get(self.report_key)
                context.set("allocation_by_investor", by_investor(report))
                context.set("allocation_summary", summary(report))
    """

    @abstractmethod
    def inputs(self) -> List[str]:
        """Context keys this block reads."""
        pass

    @abstractmethod
    def outputs(self) -> List[str]:
        """Context keys this block writes."""
        pass

    @abstractmethod
    def execute(self, context: BlockContext) -> None:
        """Read inputs from context, compute, write outputs to context.

        Raises:
            KeyError: If required inputs not available in context
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(inputs={self.inputs()}, outputs={self.outputs()})"


# =============================================================================
# Dependency Resolution
# =============================================================================

class CircularDependencyError(Exception):
    """Raised when blocks have circular dependencies."""
    pass


def topological_sort(blocks: List[Block]) -> List[Block]:
    """Order blocks so every producer runs before its consumers (Kahn's algorithm).

    Inputs that no block produces must be supplied by the initial context.

    Raises:
        CircularDependencyError: If blocks have circular dependencies
        ValueError: If two blocks declare the same output key
    """
    producers: Dict[str, Block] = {}
    for block in blocks:
        for output_key in block.outputs():
            if output_key in producers:
                raise ValueError(
                    f"Multiple blocks produce '{output_key}': "
                    f"{producers[output_key]} and {block}"
                )
            producers[output_key] = block

    in_degree: Dict[Block, int] = {block: 0 for block in blocks}
    consumers: Dict[Block, List[Block]] = {block: [] for block in blocks}

    for block in blocks:
        for input_key in block.inputs():
            producer = producers.get(input_key)
            if producer is not None:
                consumers[producer].append(block)
                in_degree[block] += 1

    ready: List[Block] = [block for block in blocks if in_degree[block] == 0]
    ordered: List[Block] = []

    while ready:
        current = ready.pop(0)
        ordered.append(current)

        for consumer in consumers[current]:
            in_degree[consumer] -= 1
            if in_degree[consumer] == 0:
                ready.append(consumer)

    if len(ordered) != len(blocks):
        remaining = [block for block in blocks if in_degree[block] > 0]
        raise CircularDependencyError(
            f"Circular dependency detected among blocks: {remaining}"
        )

    return ordered


# =============================================================================
# Block Executor
# =============================================================================

class BlockExecutor:
    """Executes blocks in dependency order.

    Example:
        executor = BlockExecutor([AllocationBlock(), DashboardBlock()])
        context = BlockContext()
        context.set("allocation_report", report)
        context.set("rounds", rounds)
        context.set("recent_activity", activity)

        executor.execute(context)

        summary_df = context.get("allocation_summary")
        rounds_df = context.get("rounds_frame")
    """

    def __init__(self, blocks: List[Block]):
        self.blocks = blocks
        self._sorted_blocks: Optional[List[Block]] = None

    def execute(self, context: BlockContext) -> BlockContext:
        """Run every block once, in dependency order.

        Args:
            context: Initial context with required inputs

        Returns:
            The same context, now holding all block outputs

        Raises:
            CircularDependencyError: If blocks have circular dependencies
            KeyError: If a required input is missing from context
            ValueError: If a block did not write a declared output
        """
        if self._sorted_blocks is None:
            self._sorted_blocks = topological_sort(self.blocks)

        for block in self._sorted_blocks:
            for input_key in block.inputs():
                if not context.has(input_key):
                    raise KeyError(
                        f"Block {block} requires input '{input_key}' but it's not in context. "
                        f"Available keys: {context.keys()}"
                    )

            block.execute(context)

            for output_key in block.outputs():
                if not context.has(output_key):
                    raise ValueError(
                        f"Block {block} declared output '{output_key}' but didn't write it to context"
                    )

        return context
