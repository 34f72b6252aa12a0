"""Tests for cross-file aggregation and stem provenance."""

from __future__ import annotations

from pathlib import Path

import pytest

from dialectgen.errors import ConfigError
from dialectgen.generation import aggregate, check_dialect_definition, classify_files, file_stem
from dialectgen.models import Capability, CapabilityFlags, ClassifiedFile
from tests._fixtures.td_project import BRIL_DIALECT_TD, BRIL_OPS_TD, BRIL_TYPES_TD


def _split_bril(td_project) -> list[Path]:
    return td_project.write(
        {
            "bril/BrilDialect.td": BRIL_DIALECT_TD,
            "bril/BrilTypes.td": BRIL_TYPES_TD,
            "bril/BrilOps.td": BRIL_OPS_TD,
        }
    )


def test_file_stem_strips_extension() -> None:
    assert file_stem(Path("src/dialect/BrilOps.td")) == "BrilOps"


@pytest.mark.parametrize("value", ["", "/"])
def test_file_stem_rejects_paths_without_stem(value: str) -> None:
    with pytest.raises(ConfigError):
        file_stem(Path(value))


def test_aggregate_ors_flags_and_tracks_each_capability_stem(td_project) -> None:
    result = aggregate(classify_files(_split_bril(td_project)))

    assert result.options == CapabilityFlags(
        has_dialect=True, has_ops=True, has_types=True, has_function_interface=True
    )
    assert result.provenance.first(Capability.DIALECT) == "BrilDialect"
    assert result.provenance.first(Capability.TYPES) == "BrilTypes"
    assert result.provenance.first(Capability.OPS) == "BrilOps"
    assert result.provenance.first(Capability.ATTRS) is None
    assert result.provenance.stems_for(Capability.ENUMS) == ()


def test_aggregate_is_independent_of_file_order(td_project) -> None:
    paths = _split_bril(td_project)

    forward = aggregate(classify_files(paths))
    backward = aggregate(classify_files(list(reversed(paths))))

    assert forward.options == backward.options
    for capability in Capability:
        assert set(forward.provenance.stems_for(capability)) == set(
            backward.provenance.stems_for(capability)
        )


def test_aggregate_keeps_every_contributing_stem_in_input_order() -> None:
    files = [
        ClassifiedFile(Path("A.td"), "A", CapabilityFlags(has_dialect=True, has_ops=True)),
        ClassifiedFile(Path("B.td"), "B", CapabilityFlags(has_ops=True)),
        ClassifiedFile(Path("Helpers.td"), "Helpers", CapabilityFlags()),
    ]

    result = aggregate(files)

    assert result.provenance.stems_for(Capability.OPS) == ("A", "B")
    assert result.provenance.stems_for(Capability.DIALECT) == ("A",)


def test_classify_files_rejects_inputs_sharing_a_stem(td_project) -> None:
    first, second = td_project.write(
        {
            "a/Ops.td": 'def X_Dialect : Dialect {}\ndef X_AOp : Op<X_Dialect, "a">;\n',
            "b/Ops.td": 'def X_BOp : Op<X_Dialect, "b">;\n',
        }
    )

    with pytest.raises(ConfigError) as excinfo:
        classify_files([first, second])

    message = str(excinfo.value)
    assert str(first) in message
    assert str(second) in message
    assert "'Ops'" in message


def test_classify_files_rejects_repeated_path(td_project) -> None:
    (path,) = td_project.write({"Ops.td": 'def X_AOp : Op<X_Dialect, "a">;\n'})

    with pytest.raises(ConfigError, match="listed more than once"):
        classify_files([path, path])


def test_check_dialect_definition_requires_one_dialect() -> None:
    no_dialect = aggregate([ClassifiedFile(Path("Ops.td"), "Ops", CapabilityFlags(has_ops=True))])
    with pytest.raises(ConfigError, match="No TableGen file defines a Dialect"):
        check_dialect_definition(no_dialect)

    twice = aggregate(
        [
            ClassifiedFile(Path("A.td"), "A", CapabilityFlags(has_dialect=True)),
            ClassifiedFile(Path("B.td"), "B", CapabilityFlags(has_dialect=True)),
        ]
    )
    with pytest.raises(ConfigError, match="more than one TableGen file"):
        check_dialect_definition(twice)


def test_classify_files_checks_stems_before_reading(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="has no file stem"):
        classify_files([tmp_path / "missing.td", Path("")])
