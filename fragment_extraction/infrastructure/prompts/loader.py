"""
Name: Prompt Loader (Versioned Templates with Frontmatter)

Responsibilities:
  - Resolve `prompts/{capability}/{version}_{lang}.md` (v1 fallback)
  - Parse the frontmatter block: type, version, lang, description, inputs
  - Render by substituting only the declared `{input}` tokens

Collaborators:
  - fragment_extraction/prompts/* (templates shipped as package data)
  - infrastructure/services/llm/* (consumers)

Notes:
  - The extraction template documents the JSON answer shape with literal
    braces, so str.format() is not an option.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...crosscutting.logger import logger

PROMPTS_DIR = Path(__file__).resolve().parents[2] / "prompts"

FRAGMENT_EXTRACTION = "fragment_extraction"
PAGE_TRANSCRIPTION = "page_transcription"

DEFAULT_LANG = "ja"
DEFAULT_VERSION = "v1"

_VERSION_RE = re.compile(r"v\d+")
_CAPABILITY_RE = re.compile(r"[a-z][a-z0-9_]*")
_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\n(?P<header>.*?)\n---[ \t]*\n", re.DOTALL)
_TOKEN_RE = re.compile(r"\{([a-z_][a-z0-9_]*)\}")


@dataclass
class PromptMetadata:
    type: str = ""
    version: str = ""
    lang: str = ""
    description: str = ""
    inputs: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PromptTemplate:
    path: Path
    metadata: PromptMetadata
    body: str


def parse_frontmatter(content: str) -> tuple[PromptMetadata, str]:
    """
    Split `---` frontmatter from the markdown body.

    Only `key: value` scalars and the `inputs:` list (`- name` items) are
    understood; anything else in the header is ignored.
    """
    match = _FRONTMATTER_RE.match(content)
    if match is None:
        return PromptMetadata(), content

    metadata = PromptMetadata()
    in_inputs = False
    for line in (raw.strip() for raw in match.group("header").splitlines()):
        if not line or line.startswith("#"):
            continue
        if line.startswith("- "):
            if in_inputs:
                metadata.inputs.append(line[2:].strip())
            continue

        key, _, value = (part.strip() for part in line.partition(":"))
        in_inputs = key == "inputs"
        if key in ("type", "version", "lang", "description") and value:
            setattr(metadata, key, value.strip("\"'"))

    return metadata, content[match.end() :]


def _read_template(path: Path) -> PromptTemplate:
    metadata, body = parse_frontmatter(path.read_text(encoding="utf-8"))
    body = body.strip()

    absent = [name for name in metadata.inputs if "{" + name + "}" not in body]
    if absent:
        raise ValueError(f"Prompt template {path.name} missing declared tokens: {', '.join(absent)}")
    return PromptTemplate(path=path, metadata=metadata, body=body)


class PromptLoader:
    """
    One capability's template, loaded lazily and cached per instance.

    Constraints:
      - capability/version are validated (no path traversal)
      - render requires exactly the declared inputs
    """

    def __init__(
        self,
        capability: str,
        version: str = DEFAULT_VERSION,
        lang: str = DEFAULT_LANG,
        *,
        prompts_dir: Path = PROMPTS_DIR,
    ):
        capability = (capability or "").strip()
        if not _CAPABILITY_RE.fullmatch(capability):
            raise ValueError(f"Invalid prompt capability '{capability}'")
        version = (version or "").strip()
        if not _VERSION_RE.fullmatch(version):
            raise ValueError(f"Invalid prompt version '{version}'. Expected v1, v2, ...")

        self.capability = capability
        self.version = version
        self.lang = lang
        self._prompts_dir = prompts_dir
        self._loaded: Optional[PromptTemplate] = None

    @property
    def metadata(self) -> PromptMetadata:
        return self._load().metadata

    def get_template(self) -> str:
        return self._load().body

    def format(self, **values: str) -> str:
        template = self._load()
        declared = set(template.metadata.inputs)

        missing = declared - values.keys()
        if missing:
            raise ValueError(f"Missing prompt inputs: {sorted(missing)}")
        unexpected = values.keys() - declared
        if unexpected:
            raise ValueError(f"Unexpected prompt inputs: {sorted(unexpected)}")

        def substitute(match: re.Match) -> str:
            name = match.group(1)
            return values[name] if name in declared else match.group(0)

        return _TOKEN_RE.sub(substitute, template.body)

    def _path_for(self, version: str) -> Path:
        return self._prompts_dir / self.capability / f"{version}_{self.lang}.md"

    def _load(self) -> PromptTemplate:
        if self._loaded is not None:
            return self._loaded

        path = self._path_for(self.version)
        if not path.exists() and self.version != DEFAULT_VERSION:
            logger.warning(
                "Prompt template missing; falling back to v1",
                extra={"capability": self.capability, "requested_version": self.version},
            )
            path = self._path_for(DEFAULT_VERSION)
        if not path.exists():
            raise FileNotFoundError(f"Prompt template not found: {path}")

        self._loaded = _read_template(path)
        logger.info(
            "Loaded prompt template",
            extra={
                "capability": self.capability,
                "template": path.name,
                "declared_inputs": self._loaded.metadata.inputs,
            },
        )
        return self._loaded
