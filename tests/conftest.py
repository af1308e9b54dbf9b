"""Pytest 配置和 fixtures

定义所有测试共享的 fixtures 和配置。
"""

import pytest
from pathlib import Path

from vocab_aligner.alignment import EntityIndex
from vocab_aligner.ensemble import MatcherSuite

from tests.helpers import (
    CallLog,
    LoggingMatcher,
    LoggingRunFilter,
    LoggingTranslator,
    make_alignment,
)


@pytest.fixture
def project_root():
    """获取项目根目录"""
    return Path(__file__).parent.parent


@pytest.fixture
def candidates():
    """多对多候选对齐"""
    return make_alignment(
        (1, 1, 0.9),
        (1, 2, 0.8),
        (2, 1, 0.7),
        (2, 2, 0.65),
        (3, 3, 0.55),
        (4, 4, 0.3),
    )


@pytest.fixture
def call_log():
    return CallLog()


@pytest.fixture
def stub_suite(call_log):
    """创建由固定对齐驱动的匹配器集合"""

    def word_factory(language, strategy):
        alignments = {
            "en": make_alignment((10, 20, 0.85), (11, 21, 0.62)),
            "fr": make_alignment((11, 21, 0.7), (12, 22, 0.66)),
            None: make_alignment((10, 20, 0.85)),
        }
        return LoggingMatcher(alignments[language], f"word[{language}]", call_log)

    def string_factory(measure):
        return LoggingMatcher(
            make_alignment((10, 20, 0.8), (13, 23, 0.75), (13, 24, 0.7)),
            "string",
            call_log,
        )

    def structural_factory(strategy, direct):
        return LoggingMatcher(
            make_alignment((14, 24, 0.68), (13, 23, 0.9), (10, 20, 0.5)),
            f"struct[{strategy.value},{direct}]",
            call_log,
        )

    return MatcherSuite(
        lexical=LoggingMatcher(
            make_alignment((10, 20, 0.95), (11, 22, 0.61)), "lexical", call_log
        ),
        background=LoggingMatcher(
            make_alignment((10, 20, 0.99), (15, 25, 0.9)), "bk", call_log
        ),
        word=word_factory,
        string=string_factory,
        structural=structural_factory,
        property=LoggingMatcher(make_alignment((16, 26, 0.64)), "property", call_log),
        block_rematcher=LoggingMatcher(
            make_alignment((10, 20, 0.9), (11, 21, 0.6), (13, 23, 0.5)),
            "block",
            call_log,
        ),
        translator=LoggingTranslator(call_log),
        obsolete_filter=LoggingRunFilter("obsolete", call_log),
        repairer=LoggingRunFilter("repair", call_log),
        entity_index=EntityIndex(f"e{i}" for i in range(40)),
    )
