"""
API 与命令行测试
"""

import json

import pytest

from vocab_aligner.api import AlignmentRefiner
from vocab_aligner.cli import main
from vocab_aligner.errors import ConfigurationError

HEADER = "source\ttarget\tsimilarity\trelation\n"


def write_tsv(path, rows):
    path.write_text(
        HEADER + "".join(f"{s}\t{t}\t{sim}\t=\n" for s, t, sim in rows),
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def inputs(tmp_path):
    """创建候选、支持与参考对齐文件"""
    return {
        "candidates": write_tsv(
            tmp_path / "candidates.tsv",
            [
                ("s1", "t1", 0.9),
                ("s1", "t2", 0.8),
                ("s2", "t1", 0.7),
                ("s2", "t2", 0.65),
                ("s3", "t3", 0.62),
            ],
        ),
        "support": [
            write_tsv(tmp_path / "sup1.tsv", [("s2", "t2", 0.9), ("s3", "t3", 0.9)]),
            write_tsv(tmp_path / "sup2.tsv", [("s2", "t2", 0.1), ("s3", "t3", 0.1)]),
        ],
        "reference": write_tsv(
            tmp_path / "reference.tsv", [("s1", "t1", 1.0), ("s2", "t2", 1.0)]
        ),
        "output": tmp_path / "out",
    }


def read_pairs(path):
    with open(path, encoding="utf-8") as f:
        lines = f.read().splitlines()[1:]
    return [tuple(line.split("\t")[:2]) for line in lines]


def test_refiner_strict_selection(inputs):
    """测试 API 严格选择"""
    refiner = AlignmentRefiner(inputs["candidates"], threshold=0.6)
    result = refiner.refine()
    assert result["stats"]["candidates"] == 5
    assert result["stats"]["selected"] == 3

    saved = refiner.save_results(result, str(inputs["output"]))
    pairs = read_pairs(saved["io"]["alignment_path"])
    assert pairs == [("s1", "t1"), ("s2", "t2"), ("s3", "t3")]
    with open(saved["io"]["report_path"], encoding="utf-8") as f:
        report = json.load(f)
    assert report["summary"]["selected"] == 3
    assert report["similarity"]["max"] == 0.9


def test_refiner_interactive(inputs):
    """测试 API 交互式选择"""
    refiner = AlignmentRefiner(
        inputs["candidates"],
        support_paths=inputs["support"],
        reference_path=inputs["reference"],
        interactive=True,
    )
    result = refiner.refine()
    run = result["run"]
    assert run.interactions.positive == 1
    assert run.interactions.negative == 1
    index = refiner.index
    assert sorted((index.uri(m.source_id), index.uri(m.target_id)) for m in result["alignment"]) == [
        ("s1", "t1"),
        ("s2", "t2"),
    ]


def test_refiner_missing_file(tmp_path):
    """测试输入文件不存在时报错"""
    with pytest.raises(FileNotFoundError):
        AlignmentRefiner(str(tmp_path / "missing.tsv"))


def test_refiner_bad_threshold(inputs):
    """测试非法阈值在边界处被拒绝"""
    with pytest.raises(ConfigurationError):
        AlignmentRefiner(inputs["candidates"], threshold=2.0)


def test_cli_select(inputs):
    """测试命令行选择并写出结果"""
    code = main(["-i", inputs["candidates"], "-o", str(inputs["output"])])
    assert code == 0
    pairs = read_pairs(inputs["output"] / "candidates_selected.tsv")
    assert pairs == [("s1", "t1"), ("s2", "t2"), ("s3", "t3")]
    assert (inputs["output"] / "selection_report.json").exists()


def test_cli_interactive_with_obsolete(inputs, tmp_path):
    """测试命令行交互式选择与过时实体过滤"""
    obsolete = tmp_path / "obsolete.txt"
    obsolete.write_text("s1\n", encoding="utf-8")
    code = main(
        [
            "-i",
            inputs["candidates"],
            "-o",
            str(inputs["output"]),
            "--interactive",
            "--reference",
            inputs["reference"],
            "--support",
            *inputs["support"],
            "--obsolete",
            str(obsolete),
            "--report-file",
            "report.json",
        ]
    )
    assert code == 0
    pairs = read_pairs(inputs["output"] / "candidates_selected.tsv")
    assert pairs == [("s2", "t1")]
    with open(inputs["output"] / "report.json", encoding="utf-8") as f:
        report = json.load(f)
    assert report["run"]["config"]["remove_obsolete"] is True


def test_cli_config_file(inputs, tmp_path):
    """测试从 JSON 配置文件读取策略"""
    config = tmp_path / "run.json"
    config.write_text(json.dumps({"selection_type": "permissive", "threshold": 0.6}))
    code = main(
        ["-i", inputs["candidates"], "-o", str(inputs["output"]), "--config", str(config)]
    )
    assert code == 0
    pairs = read_pairs(inputs["output"] / "candidates_selected.tsv")
    # 宽松策略保留对源或目标而言最佳的映射
    assert pairs == [("s1", "t1"), ("s1", "t2"), ("s2", "t1"), ("s3", "t3")]


def test_cli_flags_override_config_file(inputs, tmp_path):
    """测试命令行参数优先于配置文件"""
    config = tmp_path / "run.json"
    config.write_text(json.dumps({"selection_type": "permissive", "threshold": 0.6}))
    code = main(
        [
            "-i",
            inputs["candidates"],
            "-o",
            str(inputs["output"]),
            "--config",
            str(config),
            "--policy",
            "strict",
        ]
    )
    assert code == 0
    pairs = read_pairs(inputs["output"] / "candidates_selected.tsv")
    assert pairs == [("s1", "t1"), ("s2", "t2"), ("s3", "t3")]


def test_cli_invalid_config_file(inputs, tmp_path):
    """测试配置文件不是合法 JSON 时返回非零状态"""
    config = tmp_path / "run.json"
    config.write_text("{not json", encoding="utf-8")
    code = main(
        ["-i", inputs["candidates"], "-o", str(inputs["output"]), "--config", str(config)]
    )
    assert code == 1


def test_refiner_config_file(inputs, tmp_path):
    """测试 API 从 JSON 配置文件读取并由关键字参数覆盖"""
    config = tmp_path / "run.json"
    config.write_text(json.dumps({"selection_type": "hybrid", "threshold": 0.7}))
    refiner = AlignmentRefiner(
        inputs["candidates"], config_path=str(config), threshold=0.6
    )
    assert refiner.config.selection_type.value == "hybrid"
    assert refiner.config.threshold == 0.6


def test_refiner_interactive_needs_two_supports(inputs):
    """测试交互式选择在支持对齐少于两个时于构造时被拒绝"""
    with pytest.raises(ConfigurationError):
        AlignmentRefiner(
            inputs["candidates"],
            support_paths=inputs["support"][:1],
            reference_path=inputs["reference"],
            interactive=True,
        )


def test_cli_interactive_needs_two_supports(inputs):
    """测试命令行交互式选择在支持对齐少于两个时返回非零状态"""
    code = main(
        [
            "-i",
            inputs["candidates"],
            "-o",
            str(inputs["output"]),
            "--interactive",
            "--reference",
            inputs["reference"],
            "--support",
            inputs["support"][0],
        ]
    )
    assert code == 1
    assert not (inputs["output"] / "candidates_selected.tsv").exists()


@pytest.mark.parametrize(
    "extra",
    [
        ["--interactive"],
        ["--threshold", "1.5"],
    ],
)
def test_cli_errors_exit_nonzero(inputs, extra):
    """测试输入或配置错误时返回非零状态"""
    assert main(["-i", inputs["candidates"], "-o", str(inputs["output"]), *extra]) == 1


def test_cli_missing_input(tmp_path):
    """测试输入文件不存在时返回非零状态"""
    assert main(["-i", str(tmp_path / "nope.tsv"), "-o", str(tmp_path)]) == 1
