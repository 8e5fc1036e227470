"""Shared fixtures: small CheckV and INPHARED tables."""

from pathlib import Path

import pytest

COMPLETENESS_HEADER = (
    "contig_id\tcontig_length\tproviral_length\taai_expected_length\t"
    "aai_completeness\taai_confidence\taai_error\taai_num_hits\taai_top_hit\t"
    "aai_id\taai_af"
)

CIRCULAR_HEADER = "checkv_id\tsource\tlength\ttopology\tncbi_taxid\tlineage\thabitat"

GENBANK_HEADER = (
    "checkv_id\tgenbank_id\tncbi_id\tncbi_name\tlength\tsource\tvog_clade\tlineage"
)

PHAGE_HEADER_FIELDS = (
    ["Accession", "Description", "Classification"]
    + [f"field{i}" for i in range(3, 14)]
    + ["Host"]
    + [f"field{i}" for i in range(15, 19)]
    + ["Class"]
)


def completeness_row(contig_id: str, top_hit: str) -> str:
    return "\t".join([contig_id, "5000", "NA", "5200", "96.1", "high", "3.2", "12", top_hit, "98.0", "100.0"])


def phage_row(accession: str, description: str, classification: str, host: str, lineage: str) -> str:
    fields = (
        [accession, description, classification]
        + [f"v{i}" for i in range(3, 14)]
        + [host]
        + [f"v{i}" for i in range(15, 19)]
        + [lineage]
    )
    return "\t".join(fields)


@pytest.fixture
def completeness_text() -> str:
    return "\n".join([
        COMPLETENESS_HEADER,
        completeness_row("contigA", "DTR_ref1"),
        completeness_row("contigB", "GCA_ref2"),
        completeness_row("contigC", "NC_000866"),
        completeness_row("contigD", "XYZ123"),
        # Longer ID containing "contigA"; must not be picked up for contigA
        completeness_row("contigA_2", "GCA_ref2"),
    ]) + "\n"


@pytest.fixture
def circular_text() -> str:
    return "\n".join([
        CIRCULAR_HEADER,
        "DTR_ref1\tIMG/VR\t40000\tcircular\t10239\tViruses;Caudovirales\tsoil",
        "DTR_ref10\tIMG/VR\t38000\tcircular\t10239\tViruses;Other\tmarine",
    ]) + "\n"


@pytest.fixture
def genbank_text() -> str:
    return "\n".join([
        GENBANK_HEADER,
        "GCA_ref2\tMN000001\t12345\tPhage X\t45000\tgenbank\tVC_1\tViruses;Caudovirales;Siphoviridae",
    ]) + "\n"


@pytest.fixture
def phage_text() -> str:
    return "\n".join([
        "\t".join(PHAGE_HEADER_FIELDS),
        phage_row("NC_000866", "Enterobacteria phage T4", "Myoviridae", "Escherichia", "Caudoviricetes"),
        phage_row("NC_001416", "Escherichia phage Lambda", "Siphoviridae", "Escherichia", "Caudoviricetes"),
        phage_row("LR000001", "Pseudomonas phage P1", "Podoviridae", "Pseudomonas", "Caudoviricetes"),
    ]) + "\n"


@pytest.fixture
def abundance_text() -> str:
    return "\n".join([
        "contig\tsample1\tsample2",
        "contigA\t10\t1",
        "contigB\t20\t2",
        "contigC\t30\t3",
        "contigD\t40\t4",
        "contigE\t50\t5",
    ]) + "\n"


@pytest.fixture
def checkv_db(tmp_path: Path, circular_text: str, genbank_text: str) -> Path:
    """CheckV database directory with genome_db/ tables."""
    db_dir = tmp_path / "checkv-db"
    genome_db = db_dir / "genome_db"
    genome_db.mkdir(parents=True)
    (genome_db / "checkv_circular.tsv").write_text(circular_text)
    (genome_db / "checkv_genbank.tsv").write_text(genbank_text)
    return db_dir
