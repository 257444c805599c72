"""
engine/evaluator.py - Property evaluation

Executes a schema against one input: properties are processed strictly in
evaluation order, each dispatched to the first clause whose pattern matches
the partial result built so far and whose guard holds.

Evaluation is atomic. A dispatch failure (or an exception from a clause)
aborts the pass and no record is returned. The partial result is owned by a
single evaluation and patterns and bodies only ever see a read-only view of
it, so one Schema can serve concurrent evaluations without coordination.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
import logging
import time

from propgraph.core.declarations import Clause, PropertyDeclaration, PropertyName
from propgraph.errors import DispatchError
from propgraph.bootstrap.config import EngineConfig, get_config
from .record import ResultRecord
from .schema import Schema

logger = logging.getLogger(__name__)


# =============================================================================
# TRACE RESULTS
# =============================================================================

@dataclass
class StepResult:
    """Dispatch outcome for a single property."""
    property_name: PropertyName
    clause_index: int
    value: Any = None
    execution_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "property": self.property_name,
            "clause_index": self.clause_index,
            "value": repr(self.value),
            "execution_time_ms": self.execution_time_ms,
        }


@dataclass
class EvaluationResult:
    """Record of a traced evaluation."""
    record: ResultRecord
    started_at: datetime
    completed_at: Optional[datetime] = None
    steps: List[StepResult] = field(default_factory=list)
    total_time_ms: float = 0.0

    @property
    def order(self) -> List[PropertyName]:
        return [step.property_name for step in self.steps]

    def get_step(self, name: PropertyName) -> Optional[StepResult]:
        for step in self.steps:
            if step.property_name == name:
                return step
        return None

    def get_summary(self) -> Dict[str, Any]:
        return {
            "properties": len(self.steps),
            "total_time_ms": self.total_time_ms,
            "clauses": {step.property_name: step.clause_index for step in self.steps},
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "record": {k: repr(v) for k, v in self.record.items()},
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "steps": [step.to_dict() for step in self.steps],
            "total_time_ms": self.total_time_ms,
        }


# =============================================================================
# EVALUATOR
# =============================================================================

class Evaluator:
    """
    Evaluates inputs against a built schema.

    Holds no per-evaluation state; a single instance may be used from
    several threads at once.
    """

    def __init__(self, schema: Schema, config: Optional[EngineConfig] = None):
        self._schema = schema
        self._config = config or get_config().engine

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def config(self) -> EngineConfig:
        return self._config

    def evaluate(self, input: Any) -> ResultRecord:
        """Compute every property of the schema for one input."""
        return self._run(input, steps=None)

    def evaluate_traced(self, input: Any) -> EvaluationResult:
        """Evaluate and record which clause produced each property."""
        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()
        steps: List[StepResult] = []

        record = self._run(input, steps=steps)

        return EvaluationResult(
            record=record,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            steps=steps,
            total_time_ms=(time.perf_counter() - start) * 1000,
        )

    def _run(self, input: Any, steps: Optional[List[StepResult]]) -> ResultRecord:
        partial: Dict[PropertyName, Any] = {}
        view = MappingProxyType(partial)

        for name in self._schema.evaluation_order:
            decl = self._schema.declarations[name]
            index, chosen = self._dispatch(decl, input, view)

            start = time.perf_counter()
            try:
                value = chosen.body(input, view)
            except Exception as e:
                logger.error(f"Clause {index} of property '{name}' raised: {e}")
                raise

            # each name occurs once in evaluation_order, so never rebound
            partial[name] = value

            if steps is not None:
                steps.append(StepResult(
                    property_name=name,
                    clause_index=index,
                    value=value,
                    execution_time_ms=(time.perf_counter() - start) * 1000,
                ))

        return ResultRecord({name: partial[name] for name in self._schema.names})

    def _dispatch(
        self,
        decl: PropertyDeclaration,
        input: Any,
        partial: Mapping[PropertyName, Any],
    ) -> Tuple[int, Clause]:
        """Select the first clause whose pattern and guard hold."""
        for index, candidate in enumerate(decl.clauses):
            if candidate.match(input, partial) is not None:
                logger.debug(f"Property '{decl.name}' dispatched to clause {index}")
                return index, candidate

        logger.error(
            f"No clause matched for property '{decl.name}' "
            f"({decl.clause_count} clauses, bound: {', '.join(partial) or 'none'})"
        )
        snapshot = dict(partial) if self._config.snapshot_on_dispatch_error else None
        raise DispatchError(decl.name, snapshot, decl.clause_count)


# =============================================================================
# MODULE-LEVEL API
# =============================================================================

def evaluate(
    schema: Schema,
    input: Any,
    config: Optional[EngineConfig] = None,
) -> ResultRecord:
    """
    Evaluate a schema for one input.

    Raises:
        DispatchError: a property has no clause matching the partial result
    """
    return Evaluator(schema, config).evaluate(input)


def evaluate_many(
    schema: Schema,
    inputs: Iterable[Any],
    max_workers: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> List[ResultRecord]:
    """
    Evaluate independent inputs in parallel.

    Results are returned in input order. The first failing input's
    exception is propagated.
    """
    evaluator = Evaluator(schema, config)
    inputs = list(inputs)
    workers = max_workers or evaluator.config.max_workers

    if workers <= 1 or len(inputs) <= 1:
        return [evaluator.evaluate(item) for item in inputs]

    logger.debug(f"Evaluating {len(inputs)} inputs on {workers} workers")
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(evaluator.evaluate, inputs))
