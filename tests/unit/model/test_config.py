"""Unit tests for model.config (YAML build config and computed defaults)."""

from pathlib import Path

import pytest

from eclipse_encoding.model.config import (
    EncodingConfig,
    SourceSetSpec,
    build_registry,
    compute_default_encodings,
    load_encoding_config,
    parse_encoding_config,
)
from eclipse_encoding.model.registry import EncodingConfigError, EncodingRegistry

CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "fixtures" / "configs"


class TestComputeDefaultEncodings:
    """Tests for compute_default_encodings."""

    def test_each_dir_gets_source_set_encoding(self) -> None:
        """Every directory maps to its source set's encoding."""
        defaults = compute_default_encodings(
            [SourceSetSpec(encoding="UTF-8", dirs=["src/main/java", "/src/main/resources/"])]
        )
        assert defaults == {
            "encoding//src/main/java": "UTF-8",
            "encoding//src/main/resources": "UTF-8",
        }

    def test_later_source_set_wins_for_shared_dir(self) -> None:
        """A directory listed twice takes the last encoding."""
        defaults = compute_default_encodings(
            [
                SourceSetSpec(encoding="UTF-8", dirs=["src/shared"]),
                SourceSetSpec(encoding="UTF-16", dirs=["src/shared"]),
            ]
        )
        assert defaults == {"encoding//src/shared": "UTF-16"}


class TestLoadEncodingConfig:
    """Tests for load_encoding_config and parse_encoding_config."""

    def test_load_fixture(self) -> None:
        """The fixture config parses into source sets and resources."""
        config = load_encoding_config(CONFIG_DIR / "java_project.yaml")
        assert config.project_encoding == "ISO-8859-1"
        assert [s.name for s in config.source_sets] == ["main", "test"]
        assert config.resources == {"/src/legacy/": "Cp1252", "src/generated": None}

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing file raises EncodingConfigError."""
        with pytest.raises(EncodingConfigError, match="not found"):
            load_encoding_config(tmp_path / "nope.yaml")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Malformed YAML raises EncodingConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("not: valid: yaml: [")
        with pytest.raises(EncodingConfigError, match="Invalid YAML"):
            load_encoding_config(path)

    def test_non_mapping_root_raises(self) -> None:
        """A list root is rejected."""
        with pytest.raises(EncodingConfigError, match="root must be a mapping"):
            parse_encoding_config(["UTF-8"])

    def test_schema_violation_raises(self) -> None:
        """A source set without encoding is rejected."""
        with pytest.raises(EncodingConfigError, match="Invalid encoding config"):
            load_encoding_config(CONFIG_DIR / "bad_source_set.yaml")

    def test_unknown_top_level_key_raises(self) -> None:
        """Typos in top-level keys are rejected."""
        with pytest.raises(EncodingConfigError):
            parse_encoding_config({"project_encodng": "UTF-8"})

    def test_directory_raises(self, tmp_path: Path) -> None:
        """A directory in place of the file raises EncodingConfigError."""
        path = tmp_path / "config.yaml"
        path.mkdir()
        with pytest.raises(EncodingConfigError, match="Could not read config"):
            load_encoding_config(path)

    def test_non_utf8_raises(self, tmp_path: Path) -> None:
        """Bytes that are not UTF-8 raise EncodingConfigError."""
        path = tmp_path / "latin1.yaml"
        path.write_bytes(b"project_encoding: caf\xe9\n")
        with pytest.raises(EncodingConfigError, match="Could not read config"):
            load_encoding_config(path)

    def test_empty_file_is_empty_config(self, tmp_path: Path) -> None:
        """An empty file yields an empty config."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_encoding_config(path) == EncodingConfig()


class TestBuildRegistry:
    """Tests for build_registry."""

    def test_layers_populated_from_fixture(self) -> None:
        """Source sets fill defaults; project and resources fill overrides."""
        registry = build_registry(load_encoding_config(CONFIG_DIR / "java_project.yaml"))
        assert registry.default_encodings == {
            "encoding//src/main/java": "UTF-8",
            "encoding//src/main/resources": "UTF-8",
            "encoding//src/test/java": "UTF-8",
        }
        assert registry.override_encodings == {
            "encoding/<project>": "ISO-8859-1",
            "encoding//src/legacy": "Cp1252",
            "encoding//src/generated": None,
        }

    def test_populates_given_registry(self) -> None:
        """An existing registry keeps its file merger."""
        registry = EncodingRegistry()
        file = registry.file
        result = build_registry(EncodingConfig(project_encoding="UTF-8"), registry)
        assert result is registry
        assert result.file is file
        assert result.effective_mapping() == {"encoding/<project>": "UTF-8"}
