"""Check the distribution metadata points at shipped files."""

import re
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_readme_is_project_readme():
    pyproject = (ROOT / "pyproject.toml").read_text()

    readme = re.search(r'^readme = "(.+)"$', pyproject, re.MULTILINE).group(1)

    assert readme == "README.md"
    assert (ROOT / readme).is_file()


def test_docker_image_copies_readme():
    dockerfile = (ROOT / "Dockerfile").read_text()

    assert "COPY pyproject.toml README.md ./" in dockerfile
    assert "SPEC_FULL.md" not in dockerfile
