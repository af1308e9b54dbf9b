"""测试辅助工具"""

from typing import Callable, List, Tuple

from vocab_aligner.alignment import Alignment, Mapping, MappingRelation
from vocab_aligner.ensemble import PrecomputedMatcher, RunFilter, Translator
from vocab_aligner.selection import Oracle


def make_alignment(*triples) -> Alignment:
    """由 (source, target, similarity) 三元组构建对齐"""
    return Alignment(Mapping(s, t, sim) for s, t, sim in triples)


def as_triples(alignment: Alignment) -> List[Tuple[int, int, float]]:
    return [(m.source_id, m.target_id, m.similarity) for m in alignment]


class RecordingOracle(Oracle):
    """记录所有调用的 Oracle"""

    def __init__(self, answer: Callable[[str, str], bool] = lambda s, t: True):
        self.answer = answer
        self.calls: List[Tuple[str, str, MappingRelation]] = []

    def check(self, source_id, target_id, relationship):
        self.calls.append((source_id, target_id, relationship))
        return self.answer(source_id, target_id)


class FailingOracle(Oracle):
    """始终不可用的 Oracle"""

    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    def check(self, source_id, target_id, relationship):
        self.calls += 1
        raise self.error


class CallLog:
    """按调用顺序记录流水线阶段"""

    def __init__(self):
        self.events: List[str] = []


class LoggingMatcher(PrecomputedMatcher):
    """记录 match / extend_alignment / rematch 调用的固定匹配器"""

    def __init__(self, alignment: Alignment, name: str, log: CallLog):
        super().__init__(alignment, name=name)
        self.log = log
        self._extending = False

    def match(self, threshold):
        if not self._extending:
            self.log.events.append(f"{self.name}.match")
        return super().match(threshold)

    def extend_alignment(self, alignment, threshold):
        self.log.events.append(f"{self.name}.extend")
        self._extending = True
        try:
            return super().extend_alignment(alignment, threshold)
        finally:
            self._extending = False

    def rematch(self, alignment):
        self.log.events.append(f"{self.name}.rematch")
        return super().rematch(alignment)


class LoggingTranslator(Translator):
    def __init__(self, log: CallLog):
        self.log = log

    def translate(self):
        self.log.events.append("translate")


class LoggingRunFilter(RunFilter):
    """记录调用并可选地移除指定映射"""

    def __init__(self, name: str, log: CallLog, drop=()):
        self.name = name
        self.log = log
        self.drop = list(drop)

    def filter(self, run):
        self.log.events.append(f"{self.name}.filter")
        for s, t in self.drop:
            run.alignment.remove(s, t)
