"""Unit tests for mash output parsing, min-distance reduction and host join."""

from pathlib import Path
from unittest.mock import Mock, patch

import polars as pl
import pytest
from polars.testing import assert_frame_equal

from phagelink.config.schema import DistanceToolConfig, PipelineConfig
from phagelink.distance import (
    SUMMARY_HEADER,
    DistanceHit,
    DistanceToolError,
    HostAnnotationJoiner,
    MashRunner,
    hits_to_frame,
    parse_distance_hits,
    reduce_min_distance,
    run_host,
)

from conftest import PHAGE_HEADER_FIELDS, phage_row

SCENARIO_OUTPUT = (
    "ref1\tqueryA\t0.05\t0.01\t100/1000\n"
    "ref2\tqueryA\t0.02\t0.03\t300/1000\n"
    "ref3\tqueryB\t0.10\t0.02\t50/1000\n"
)


def _hit(query, reference, distance, p_value="0"):
    return DistanceHit(
        query_id=query,
        reference_id=reference,
        distance=float(distance),
        distance_text=distance,
        p_value=p_value,
    )


# parse_distance_hits

def test_parse_distance_hits_columns():
    hits = parse_distance_hits(SCENARIO_OUTPUT)

    assert hits[0] == DistanceHit(
        query_id="queryA",
        reference_id="ref1",
        distance=0.05,
        distance_text="0.05",
        p_value="0.01",
    )
    assert len(hits) == 3


def test_parse_distance_hits_accepts_four_columns_and_blank_lines():
    hits = parse_distance_hits("ref1\tq\t0\t1\n\n")

    assert len(hits) == 1
    assert hits[0].distance == 0.0


def test_parse_distance_hits_too_few_columns():
    with pytest.raises(ValueError, match="line 2"):
        parse_distance_hits("ref1\tq\t0.1\t0.5\nref2\tq\t0.2\n")


def test_parse_distance_hits_non_numeric_distance():
    with pytest.raises(ValueError, match="not a number"):
        parse_distance_hits("ref1\tq\tfar\t0.5\n")


def test_hits_to_frame_schema():
    df = hits_to_frame([_hit("q", "r", "0.5")])

    expected = pl.DataFrame({"query_id": ["q"], "reference_id": ["r"], "distance": [0.5]})
    assert_frame_equal(df, expected)
    assert hits_to_frame([]).height == 0


# reduce_min_distance

def test_reduce_scenario():
    """queryA keeps ref2 (0.02); queryB keeps its only hit."""
    best = reduce_min_distance(parse_distance_hits(SCENARIO_OUTPUT))

    assert set(best) == {"queryA", "queryB"}
    assert (best["queryA"].reference_id, best["queryA"].distance_text, best["queryA"].p_value) == (
        "ref2", "0.02", "0.03",
    )
    assert (best["queryB"].reference_id, best["queryB"].distance_text, best["queryB"].p_value) == (
        "ref3", "0.10", "0.02",
    )


def test_reduce_picks_numeric_minimum():
    """Distances are compared as numbers, not strings."""
    hits = [
        _hit("q", "r1", "0.5"),
        _hit("q", "r2", "1e-3"),
        _hit("q", "r3", "0.25"),
        _hit("q", "r4", "0.1"),
    ]

    assert reduce_min_distance(hits)["q"].reference_id == "r2"


def test_reduce_tie_keeps_first_seen():
    hits = [
        _hit("q", "first", "0.01"),
        _hit("q", "second", "0.01"),
        _hit("q", "worse", "0.02"),
    ]

    assert reduce_min_distance(hits)["q"].reference_id == "first"


def test_reduce_orders_by_first_appearance():
    hits = [
        _hit("z", "r1", "0.3"),
        _hit("a", "r2", "0.1"),
        _hit("m", "r3", "0.2"),
        _hit("a", "r4", "0.05"),
        _hit("z", "r5", "0.01"),
    ]

    best = reduce_min_distance(hits)

    assert list(best) == ["z", "a", "m"]
    assert [h.reference_id for h in best.values()] == ["r5", "r4", "r3"]


def test_reduce_returns_original_hit_objects():
    hits = [_hit("q", "r1", "0.3"), _hit("q", "r2", "0.1")]

    assert reduce_min_distance(hits)["q"] is hits[1]


def test_reduce_empty():
    assert reduce_min_distance([]) == {}


def test_reduce_matches_brute_force():
    """Cross-check against a straightforward scan over a mixed stream."""
    hits = [
        _hit(f"q{i % 7}", f"r{i}", str(round(((i * 37) % 11) / 100, 2)))
        for i in range(60)
    ]

    best = reduce_min_distance(hits)

    expected = {}
    for h in hits:
        if h.query_id not in expected or h.distance < expected[h.query_id].distance:
            expected[h.query_id] = h
    assert best == expected


# MashRunner

@pytest.fixture
def mash_inputs(tmp_path: Path) -> tuple[Path, Path]:
    sketch = tmp_path / "inphared.msh"
    sketch.write_bytes(b"sketch")
    contigs = tmp_path / "contigs.fna"
    contigs.write_text(">contig1\nACGT\n")
    return sketch, contigs


def test_runner_command():
    runner = MashRunner(executable="mash", max_p_value=1.0)

    assert runner.build_command("db.msh", "q.fna") == [
        "mash", "dist", "-i", "db.msh", "q.fna", "-v", "1",
    ]


def test_runner_from_config():
    config = PipelineConfig(distance=DistanceToolConfig(executable="/opt/mash", max_p_value=0.05))

    runner = MashRunner.from_config(config)

    assert runner.executable == "/opt/mash"
    assert runner.build_command("d", "q")[-1] == "0.05"


def test_runner_returns_stdout(mash_inputs):
    sketch, contigs = mash_inputs

    with patch("phagelink.distance.runner.subprocess.run") as mock_run:
        mock_run.return_value = Mock(returncode=0, stdout=SCENARIO_OUTPUT, stderr="")

        output = MashRunner().compute_distances(sketch, contigs)

    assert output == SCENARIO_OUTPUT
    cmd = mock_run.call_args.args[0]
    assert cmd[:3] == ["mash", "dist", "-i"]
    assert cmd[3:5] == [str(sketch), str(contigs)]


def test_runner_nonzero_exit(mash_inputs):
    sketch, contigs = mash_inputs

    with patch("phagelink.distance.runner.subprocess.run") as mock_run:
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="ERROR: bad sketch\n")

        with pytest.raises(DistanceToolError, match="bad sketch"):
            MashRunner().compute_distances(sketch, contigs)


def test_runner_missing_executable(mash_inputs):
    sketch, contigs = mash_inputs

    with patch("phagelink.distance.runner.subprocess.run", side_effect=FileNotFoundError):
        with pytest.raises(DistanceToolError, match="not found"):
            MashRunner(executable="no-such-mash").compute_distances(sketch, contigs)


def test_runner_missing_input(tmp_path):
    with patch("phagelink.distance.runner.subprocess.run") as mock_run:
        with pytest.raises(FileNotFoundError, match="mash sketch"):
            MashRunner().compute_distances(tmp_path / "none.msh", tmp_path / "none.fna")

    mock_run.assert_not_called()


# HostAnnotationJoiner

def test_joiner_summary_mode(phage_text):
    joiner = HostAnnotationJoiner(phage_text)

    assert joiner.header() == "\t".join(SUMMARY_HEADER)
    assert joiner.join(_hit("contig1", "NC_001416", "0.02", "1e-10")) == (
        "contig1\tNC_001416\t0.02\t1e-10\tEscherichia"
    )


def test_joiner_full_mode(phage_text):
    joiner = HostAnnotationJoiner(phage_text, all_info=True)
    phage_rows = phage_text.splitlines()

    assert joiner.header() == "contig_id\tphage_id\tmash_distance\tmash_p\t" + "\t".join(PHAGE_HEADER_FIELDS)
    assert joiner.join(_hit("contig1", "LR000001", "0.02", "0")) == (
        "contig1\tLR000001\t0.02\t0\t" + phage_rows[3]
    )


def test_joiner_missing_reference_has_empty_host(phage_text):
    joiner = HostAnnotationJoiner(phage_text)

    assert joiner.join(_hit("contig1", "NC_999999", "0.3", "0.5")) == "contig1\tNC_999999\t0.3\t0.5\t"


def test_joiner_exact_reference_match():
    """NC_0008 must not match the NC_000866 row."""
    text = "\t".join(PHAGE_HEADER_FIELDS) + "\n" + "\t".join(["NC_000866"] + ["x"] * 13 + ["Escherichia"] + ["y"] * 5)

    assert HostAnnotationJoiner(text).host_for("NC_0008") == ""


def test_joiner_full_mode_requires_header():
    with pytest.raises(ValueError, match="empty"):
        HostAnnotationJoiner("", all_info=True).header()


def test_run_host(phage_text):
    output = (
        "NC_001416\tcontig1\t0.20\t0.001\t10/1000\n"
        "NC_000866\tcontig1\t0.05\t0.0001\t400/1000\n"
        "LR000001\tcontig2\t0.08\t0.002\t200/1000\n"
        "NC_424242\tcontig3\t0.15\t0.01\t20/1000\n"
    )

    result = run_host(output, phage_text)

    assert result.lines == [
        "contig_id\tphage_id\tmash_distance\tmash_p\thost",
        "contig1\tNC_000866\t0.05\t0.0001\tEscherichia",
        "contig2\tLR000001\t0.08\t0.002\tPseudomonas",
        "contig3\tNC_424242\t0.15\t0.01\t",
    ]
    assert list(result.best_hits) == ["contig1", "contig2", "contig3"]


def test_run_host_unparsable_output(phage_text):
    with pytest.raises(ValueError):
        run_host("garbage\n", phage_text)


def test_run_host_form_feed_in_phage_description():
    """A control character inside a phage table field keeps the row intact."""
    phage_text = "\n".join([
        "\t".join(PHAGE_HEADER_FIELDS),
        phage_row("NC_000866", "T4\x0cvariant", "Myoviridae", "Escherichia", "Caudoviricetes"),
        phage_row("LR000001", "P1 phage", "Podoviridae", "Pseudomonas", "Caudoviricetes"),
    ]) + "\n"
    output = (
        "NC_000866\tq1\t0.05\t0.01\t100/1000\n"
        "LR000001\tq2\t0.04\t0.02\t120/1000\n"
    )

    result = run_host(output, phage_text)

    assert result.lines[1:] == [
        "q1\tNC_000866\t0.05\t0.01\tEscherichia",
        "q2\tLR000001\t0.04\t0.02\tPseudomonas",
    ]


def test_joiner_lookup_ignores_padding_around_reference(phage_text):
    """Reference IDs padded with whitespace still find their phage row."""
    joiner = HostAnnotationJoiner(phage_text)

    assert joiner.host_for(" NC_000866 ") == "Escherichia"
    assert joiner.join_all({"c1": _hit("c1", "NC_000866 ", "0.1")})[1].endswith("\tEscherichia")
