"""Candidate Java homes taken from environment variables.

Variables consulted (read-only, at call time):

* ``JAVA_HOME``, ``JAVA_ROOT``, ``JDK_HOME``, ``JRE_HOME`` - each value is a
  candidate Java home
* ``PATH`` - each entry holding a ``java`` launcher, or named ``bin``, points
  at a candidate Java home
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, List, Mapping, Optional, Sequence

from .classifier import RuntimeClassifier
from .specs import BIN_DIR_NAME, JAVA_HOME_VARIABLES, PATH_VARIABLE
from .types import Candidate, CandidateSource, JavaRuntime

logger = logging.getLogger(__name__)


class EnvironmentProbe:
    """Reads Java-related environment variables and classifies what they name."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        java_home_variables: Optional[Sequence[str]] = None,
        path_variable: str = PATH_VARIABLE,
        classifier: Optional[RuntimeClassifier] = None,
    ):
        """Initialize probe.

        Args:
            environ: Environment snapshot to read; None reads the live
                ``os.environ`` on every call
            java_home_variables: Variables holding a Java home path
            path_variable: Executable search path variable
            classifier: Classifier used to validate candidates
        """
        self._environ = environ
        self.java_home_variables = list(
            java_home_variables if java_home_variables is not None else JAVA_HOME_VARIABLES
        )
        self.path_variable = path_variable
        self.classifier = classifier or RuntimeClassifier()

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    def probe(self) -> List[JavaRuntime]:
        """Classify every candidate; invalid ones are dropped silently."""
        runtimes = []
        for candidate in self.iter_candidates():
            runtime = self.classifier.classify(candidate)
            if runtime:
                runtimes.append(runtime)
            else:
                logger.debug("%s does not name a Java home: %s", candidate.origin, candidate.path)
        return runtimes

    def iter_candidates(self) -> Iterator[Candidate]:
        environ = self.environ

        for var_name in self.java_home_variables:
            value = (environ.get(var_name) or "").strip()
            if value:
                yield Candidate(
                    path=Path(value),
                    source=CandidateSource.ENVIRONMENT,
                    origin=var_name,
                )

        search_path = environ.get(self.path_variable) or ""
        for entry in search_path.split(os.pathsep):
            home = self._home_from_path_entry(entry)
            if home is not None:
                yield Candidate(
                    path=home,
                    source=CandidateSource.ENVIRONMENT,
                    origin=self.path_variable,
                )

    def _home_from_path_entry(self, entry: str) -> Optional[Path]:
        """Derive a Java home from one search path entry."""
        entry = entry.strip().strip('"')
        if not entry:
            return None
        bin_dir = Path(entry)

        launcher = self.classifier.find_launcher(bin_dir)
        if launcher is not None:
            # /usr/bin/java usually links into the real installation
            real_launcher = Path(os.path.realpath(launcher))
            if real_launcher.parent.name == BIN_DIR_NAME:
                return real_launcher.parent.parent
            return None

        if bin_dir.name == BIN_DIR_NAME:
            return bin_dir.parent
        return None
