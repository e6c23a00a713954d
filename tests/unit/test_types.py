"""Unit tests for runtime data types."""

from pathlib import Path

import pytest

from java_runtimes.types import Candidate, CandidateSource, JavaRuntime, RuntimeMetadata


class TestJavaRuntime:
    """Test JavaRuntime dataclass."""

    def test_runtime_creation(self):
        """Should create JavaRuntime correctly."""
        runtime = JavaRuntime(
            path=Path("/opt/jdk-17.0.2"),
            version="17.0.2",
            vendor="Eclipse Adoptium",
            architecture="x86_64",
        )

        assert runtime.path == Path("/opt/jdk-17.0.2")
        assert runtime.version == "17.0.2"
        assert runtime.vendor == "Eclipse Adoptium"
        assert runtime.architecture == "x86_64"

    def test_defaults(self):
        """Version defaults to empty, vendor and architecture to None."""
        runtime = JavaRuntime(path=Path("/opt/jdk"))

        assert runtime.version == ""
        assert runtime.vendor is None
        assert runtime.architecture is None

    def test_equality_uses_path_only(self):
        """Runtimes at the same path are equal whatever their metadata."""
        r1 = JavaRuntime(path=Path("/jdk"), version="21.0.3")
        r2 = JavaRuntime(path=Path("/jdk"), version="21", vendor="Oracle Corporation")
        r3 = JavaRuntime(path=Path("/jdk-17"), version="21.0.3")

        assert r1 == r2
        assert r1 != r3
        assert hash(r1) == hash(r2)

    def test_set_deduplicates_by_path(self):
        """A set never holds two runtimes with the same path."""
        runtimes = {
            JavaRuntime(path=Path("/jdk"), version="21.0.3"),
            JavaRuntime(path=Path("/jdk"), version=""),
            JavaRuntime(path=Path("/jre"), version="8"),
        }
        assert len(runtimes) == 2

    def test_immutable(self):
        """Runtimes are frozen."""
        runtime = JavaRuntime(path=Path("/jdk"))
        with pytest.raises(AttributeError):
            runtime.version = "17"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "version, major",
        [
            ("17.0.2", 17),
            ("1.8.0_291", 8),
            ("1.7", 7),
            ("21", 21),
            ("11.0.21", 11),
            ("", None),
        ],
    )
    def test_major_version(self, version, major):
        """Legacy 1.x versions unwrap to their feature number."""
        assert JavaRuntime(path=Path("/jdk"), version=version).major_version == major

    def test_version_specificity(self):
        assert JavaRuntime(path=Path("/jdk"), version="").version_specificity == 0
        assert JavaRuntime(path=Path("/jdk"), version="17").version_specificity == 1
        assert JavaRuntime(path=Path("/jdk"), version="1.8.0_291").version_specificity == 4

    def test_executable(self):
        """Executable points at the launcher under bin."""
        runtime = JavaRuntime(path=Path("/opt/jdk-17"))
        assert runtime.executable.parent == Path("/opt/jdk-17/bin")
        assert runtime.executable.name in ("java", "java.exe")

    def test_repr(self):
        """Should have useful repr."""
        runtime = JavaRuntime(
            path=Path("/opt/jdk-17.0.2"),
            version="17.0.2",
            vendor="Eclipse Adoptium",
            architecture="x86_64",
        )

        repr_str = repr(runtime)
        assert "17.0.2" in repr_str
        assert "Eclipse Adoptium" in repr_str
        assert "x86_64" in repr_str
        assert str(Path("/opt/jdk-17.0.2")) in repr_str

    def test_repr_unknown_version(self):
        assert "unknown version" in repr(JavaRuntime(path=Path("/jdk")))

    def test_to_dict(self):
        runtime = JavaRuntime(path=Path("/opt/jdk1.8.0_291"), version="1.8.0_291")

        assert runtime.to_dict() == {
            "path": str(Path("/opt/jdk1.8.0_291")),
            "version": "1.8.0_291",
            "major_version": 8,
            "vendor": None,
            "architecture": None,
        }


class TestRuntimeMetadata:
    """Test partial metadata merging."""

    def test_merged_fills_missing_fields(self):
        primary = RuntimeMetadata(version="21.0.1", vendor="Eclipse Adoptium")
        fallback = RuntimeMetadata(version="21", architecture="aarch64")

        merged = primary.merged(fallback)

        assert merged.version == "21.0.1"
        assert merged.vendor == "Eclipse Adoptium"
        assert merged.architecture == "aarch64"

    def test_is_complete(self):
        assert not RuntimeMetadata(version="17").is_complete
        assert RuntimeMetadata(version="17", vendor="Azul Systems, Inc.", architecture="x86_64").is_complete


class TestCandidate:
    """Test Candidate dataclass."""

    def test_candidate_source_values(self):
        assert CandidateSource.ENVIRONMENT.value == "environment"
        assert CandidateSource.FILESYSTEM_WALK.value == "filesystem_walk"

    def test_candidate_creation(self):
        candidate = Candidate(
            path=Path("/opt/jdk"),
            source=CandidateSource.ENVIRONMENT,
            origin="JAVA_HOME",
        )
        assert candidate.origin == "JAVA_HOME"
