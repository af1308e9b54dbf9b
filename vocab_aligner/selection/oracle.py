"""Oracle contract and implementations

An oracle is the external yes/no authority consulted by interactive
selection. ``ReferenceOracle`` simulates a user from a reference alignment;
``TimeoutOracle`` bounds how long any oracle may take to answer.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Dict, Optional, Tuple
import logging

import numpy as np

from ..alignment import Alignment, EntityIndex, MappingRelation
from ..errors import ConfigurationError, OracleUnavailable
from ..utils import check_unit_interval


class Oracle(ABC):
    """Correspondence authority

    Implementations answer whether ``source_id`` and ``target_id`` (external
    identifiers) are related by ``relationship``.
    """

    @abstractmethod
    def check(
        self, source_id: str, target_id: str, relationship: MappingRelation
    ) -> bool:
        raise NotImplementedError


class ReferenceOracle(Oracle):
    """Simulated user backed by a reference alignment

    Answers True for pairs present in the reference with a compatible
    relationship. With ``error_rate`` > 0 each answer is flipped with that
    probability, drawn from a seeded numpy generator so runs are repeatable.
    """

    def __init__(
        self,
        reference: Alignment,
        index: EntityIndex,
        error_rate: float = 0.0,
        seed: Optional[int] = 0,
    ):
        self.error_rate = check_unit_interval(error_rate, "Oracle error rate")
        self._truth: Dict[Tuple[str, str], MappingRelation] = {
            (index.uri(m.source_id), index.uri(m.target_id)): m.relationship
            for m in reference
        }
        self._rng = np.random.default_rng(seed)
        self.queries = 0
        self.logger = logging.getLogger(__name__)

    def check(
        self, source_id: str, target_id: str, relationship: MappingRelation
    ) -> bool:
        self.queries += 1
        expected = self._truth.get((source_id, target_id))
        answer = expected is not None and (
            relationship is MappingRelation.UNKNOWN
            or expected is MappingRelation.UNKNOWN
            or expected is relationship
        )
        if self.error_rate > 0 and self._rng.random() < self.error_rate:
            answer = not answer
        self.logger.debug(f"Oracle {source_id} {relationship} {target_id}: {answer}")
        return answer


class TimeoutOracle(Oracle):
    """Wraps an oracle so that slow or failing answers surface as
    OracleUnavailable.

    Calls run on a single worker thread; the caller still waits for each
    answer in turn. Use as a context manager or call ``close()``.
    """

    def __init__(self, oracle: Oracle, timeout: float):
        if timeout is None or timeout <= 0:
            raise ConfigurationError(f"Oracle timeout must be positive, got {timeout}")
        self.oracle = oracle
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=1)

    def check(
        self, source_id: str, target_id: str, relationship: MappingRelation
    ) -> bool:
        future = self._executor.submit(
            self.oracle.check, source_id, target_id, relationship
        )
        try:
            return bool(future.result(timeout=self.timeout))
        except FutureTimeoutError:
            future.cancel()
            raise OracleUnavailable(
                f"Oracle did not answer within {self.timeout}s",
                source_id=source_id,
                target_id=target_id,
            ) from None
        except OracleUnavailable:
            raise
        except Exception as e:
            raise OracleUnavailable(
                f"Oracle failed: {e}", source_id=source_id, target_id=target_id
            ) from e

    def close(self):
        self._executor.shutdown(wait=False)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
