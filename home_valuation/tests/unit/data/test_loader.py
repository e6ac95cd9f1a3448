"""Tests for dataset loading."""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import pytest

from home_valuation.data import (
    FEATURE_ORDER,
    ColumnConfigError,
    ColumnMapping,
    DataFormatError,
    Dataset,
    LabeledSample,
    load_column_mapping,
    load_dataset,
)


class TestLoadDataset:
    """Tests for load_dataset with the default scraper layout."""

    def test_loads_rows(self, write_csv, make_row) -> None:
        """Rows are parsed into features and targets."""
        path = write_csv([make_row(), make_row(price="300000", size="100")])

        dataset = load_dataset(path)

        assert len(dataset) == 2
        assert dataset.feature_count == 11
        assert dataset.targets.tolist() == [250000.0, 300000.0]
        assert dataset.features[0].tolist() == [
            85.0, 3.0, 40.4168, -3.7038, 1.0, 2941.0, 3.0, 2.0, 0.0, 0.0, 1.0
        ]
        assert dataset.features[1, 0] == 100.0

    def test_accepts_text_stream(self, write_csv, make_row) -> None:
        """Open text streams are accepted as source."""
        path = write_csv([make_row()])
        stream = io.StringIO(path.read_text())

        dataset = load_dataset(stream)

        assert len(dataset) == 1

    def test_round_trips_generated_dataset(self, listings_csv, noisy_dataset) -> None:
        """A dataset written to CSV loads back with identical values."""
        dataset = load_dataset(listings_csv(noisy_dataset))

        np.testing.assert_array_equal(dataset.features, noisy_dataset.features)
        np.testing.assert_array_equal(dataset.targets, noisy_dataset.targets)

    def test_dataset_is_read_only(self, write_csv, make_row) -> None:
        """Loaded arrays can't be mutated in place."""
        dataset = load_dataset(write_csv([make_row()]))

        with pytest.raises(ValueError):
            dataset.features[0, 0] = 1.0
        with pytest.raises(ValueError):
            dataset.targets[0] = 1.0

    def test_skips_blank_lines(self, tmp_path: Path, make_row) -> None:
        path = tmp_path / "blank.csv"
        path.write_text("header\n" + ",".join(make_row()) + "\n\n")

        assert len(load_dataset(path)) == 1


class TestRequiredFields:
    """Unparseable required fields fail the whole load."""

    def test_bad_latitude_raises(self, write_csv, make_row) -> None:
        """Non-numeric latitude names the row and field."""
        path = write_csv([make_row(), make_row(latitude="north")])

        with pytest.raises(DataFormatError, match="latitude") as exc_info:
            load_dataset(path)

        assert exc_info.value.row == 1
        assert exc_info.value.field == "latitude"
        assert exc_info.value.stage == "load"

    def test_bad_target_raises(self, write_csv, make_row) -> None:
        path = write_csv([make_row(price="")])

        with pytest.raises(DataFormatError) as exc_info:
            load_dataset(path)

        assert exc_info.value.field == "target"
        assert exc_info.value.row == 0

    @pytest.mark.parametrize(
        "column,field",
        [
            ("size", "size"),
            ("longitude", "longitude"),
            ("price_by_area", "price_per_area"),
            ("rooms", "rooms"),
            ("bathrooms", "bathrooms"),
        ],
    )
    def test_each_required_numeric_field(self, write_csv, make_row, column, field) -> None:
        path = write_csv([make_row(**{column: "n/a"})])

        with pytest.raises(DataFormatError) as exc_info:
            load_dataset(path)

        assert exc_info.value.field == field

    def test_non_finite_value_raises(self, write_csv, make_row) -> None:
        """NaN parses as a float but isn't accepted."""
        path = write_csv([make_row(size="nan")])

        with pytest.raises(DataFormatError, match="not finite"):
            load_dataset(path)

    def test_short_row_raises(self, write_csv, make_row) -> None:
        """A row too short to hold a required column fails."""
        path = write_csv([make_row()[:10]])

        with pytest.raises(DataFormatError, match="missing required field") as exc_info:
            load_dataset(path)

        assert exc_info.value.field == "longitude"

    def test_no_rows_raises(self, write_csv) -> None:
        path = write_csv([])

        with pytest.raises(DataFormatError, match="no data rows"):
            load_dataset(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DataFormatError, match="not found"):
            load_dataset(tmp_path / "missing.csv")


class TestUnreadableSource:
    """Decode and csv errors surface as DataFormatError."""

    def test_invalid_utf8_in_ignored_column(self, write_csv, make_row) -> None:
        """Bad bytes anywhere in the file fail the load, even in unmapped columns."""
        path = write_csv([make_row(address="PLACEHOLDER")])
        path.write_bytes(path.read_bytes().replace(b"PLACEHOLDER", b"\xff\xfe"))

        with pytest.raises(DataFormatError, match="cannot read dataset") as exc_info:
            load_dataset(path)

        assert exc_info.value.stage == "load"
        assert exc_info.value.row == 0
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_oversized_field_in_stream(self, write_csv, make_row) -> None:
        path = write_csv([make_row(), make_row(address="x" * 200_000)])
        stream = io.StringIO(path.read_text())

        with pytest.raises(DataFormatError, match="cannot read dataset") as exc_info:
            load_dataset(stream)

        assert exc_info.value.stage == "load"
        assert exc_info.value.row == 1


class TestDataset:
    """Tests for Dataset construction."""

    def test_from_samples(self) -> None:
        samples = [
            LabeledSample(target=100.0, features=tuple(float(i) for i in range(11))),
            LabeledSample(target=200.0, features=(1.0,) * 11),
        ]

        dataset = Dataset.from_samples(samples)

        assert len(dataset) == 2
        assert dataset.targets.tolist() == [100.0, 200.0]
        assert dataset.features[0].tolist() == [float(i) for i in range(11)]
        assert not dataset.features.flags.writeable

    def test_from_samples_empty_raises(self) -> None:
        with pytest.raises(DataFormatError):
            Dataset.from_samples([])

    def test_wrong_width_raises(self) -> None:
        with pytest.raises(DataFormatError, match="shape"):
            Dataset.from_samples([LabeledSample(target=1.0, features=(1.0, 2.0))])


class TestOptionalFields:
    """Floor and boolean fields never fail a load."""

    @pytest.mark.parametrize("floor", ["", "bajo", "  "])
    def test_unparseable_floor_defaults_to_zero(self, write_csv, make_row, floor) -> None:
        dataset = load_dataset(write_csv([make_row(floor=floor)]))

        assert dataset.features[0, 1] == 0.0

    def test_floor_is_parsed_when_valid(self, write_csv, make_row) -> None:
        dataset = load_dataset(write_csv([make_row(floor=" 7 ")]))

        assert dataset.features[0, 1] == 7.0

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("true", 1.0),
            ("  true ", 1.0),
            ("false", 0.0),
            ("True", 0.0),
            ("TRUE", 0.0),
            ("1", 0.0),
            ("", 0.0),
        ],
    )
    def test_boolean_parsing(self, write_csv, make_row, text, expected) -> None:
        """Only exact 'true' after trimming counts as set."""
        dataset = load_dataset(write_csv([make_row(swimming_pool=text)]))

        assert dataset.features[0, FEATURE_ORDER.index("swimming_pool")] == expected


class TestColumnMapping:
    """Tests for explicit column positions."""

    def test_default_mapping_matches_scraper_layout(self) -> None:
        mapping = load_column_mapping()

        assert mapping.target == 1
        assert mapping.features["size"] == 2
        assert mapping.features["latitude"] == 9
        assert mapping.features["garage"] == 17

    def test_custom_mapping(self) -> None:
        """Positions come from the mapping, not from headers."""
        mapping = ColumnMapping(
            target=11,
            features={name: i for i, name in enumerate(FEATURE_ORDER)},
        )
        source = io.StringIO(
            "a,b,c,d,e,f,g,h,i,j,k,price\n"
            "80,2,40.1,-3.5,true,3000,3,1,false,true,false,240000\n"
        )

        dataset = load_dataset(source, columns=mapping)

        assert dataset.targets.tolist() == [240000.0]
        assert dataset.features[0].tolist() == [
            80.0, 2.0, 40.1, -3.5, 1.0, 3000.0, 3.0, 1.0, 0.0, 1.0, 0.0
        ]

    def test_missing_feature_raises(self) -> None:
        with pytest.raises(ColumnConfigError, match="missing features"):
            ColumnMapping(target=0, features={"size": 1})

    def test_negative_position_raises(self) -> None:
        features = {name: i + 1 for i, name in enumerate(FEATURE_ORDER)}
        features["rooms"] = -1

        with pytest.raises(ColumnConfigError, match="rooms"):
            ColumnMapping(target=0, features=features)

    def test_unknown_feature_raises(self) -> None:
        features = {name: i + 1 for i, name in enumerate(FEATURE_ORDER)}
        features["balcony"] = 20

        with pytest.raises(ColumnConfigError, match="balcony"):
            ColumnMapping(target=0, features=features)

    def test_config_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ColumnConfigError, match="not found"):
            load_column_mapping(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("target: [1\n")

        with pytest.raises(ColumnConfigError, match="Invalid YAML"):
            load_column_mapping(path)

    def test_config_missing_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "partial.yaml"
        path.write_text("target: 1\n")

        with pytest.raises(ColumnConfigError, match="features"):
            load_column_mapping(path)
