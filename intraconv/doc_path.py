"""Slash-separated view of link targets.

Link targets are handled as paths, URLs included: ``https://docs.rs/regex``
becomes the components ``("https:", "docs.rs", "regex")``. Empty segments are
dropped, ``.`` is only kept as the very first component and a leading ``/``
is kept as a root marker so absolute targets can be recognized and refused.

Examples
--------
>>> from intraconv.doc_path import DocPath
>>> DocPath.parse("./././mod1//struct.A.html").parts
('.', 'mod1', 'struct.A.html')
>>> DocPath.parse("../mod1/index.html").parent.parts
('..', 'mod1')
"""

from __future__ import annotations

import dataclasses as dc

CUR_DIR = "."
PARENT_DIR = ".."
ROOT_DIR = "/"


@dc.dataclass(frozen=True, slots=True)
class DocPath:
    """Immutable sequence of path components."""

    parts: tuple[str, ...] = ()

    @classmethod
    def parse(cls, raw: str) -> DocPath:
        components: list[str] = []
        if raw.startswith("/"):
            components.append(ROOT_DIR)
        for index, segment in enumerate(raw.split("/")):
            if not segment:
                continue
            if segment == CUR_DIR and index != 0:
                continue
            components.append(segment)
        return cls(tuple(components))

    def __bool__(self) -> bool:
        return bool(self.parts)

    def __len__(self) -> int:
        return len(self.parts)

    def __str__(self) -> str:
        if self.parts[:1] == (ROOT_DIR,):
            return ROOT_DIR + "/".join(self.parts[1:])
        return "/".join(self.parts)

    @property
    def is_absolute(self) -> bool:
        return self.parts[:1] == (ROOT_DIR,)

    @property
    def file_name(self) -> str | None:
        """Return the last component when it names something."""
        if not self.parts or self.parts[-1] in (CUR_DIR, PARENT_DIR, ROOT_DIR):
            return None
        return self.parts[-1]

    @property
    def parent(self) -> DocPath:
        return DocPath(self.parts[:-1])

    @property
    def first(self) -> str | None:
        return self.parts[0] if self.parts else None

    def strip_first(self, count: int = 1) -> DocPath:
        return DocPath(self.parts[count:])


__all__ = ["CUR_DIR", "PARENT_DIR", "ROOT_DIR", "DocPath"]
