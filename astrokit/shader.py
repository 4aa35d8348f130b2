"""Shader source handling: stage detection, includes, conditionals and macros."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ShaderError(Exception):
    """Raised when shader source cannot be loaded or preprocessed."""


class ShaderType(Enum):
    """Shader pipeline stage, valued by its OpenGL enumerant."""

    VERTEX = 0x8B31
    FRAGMENT = 0x8B30
    GEOMETRY = 0x8DD9
    COMPUTE = 0x91B9

    @property
    def label(self) -> str:
        return self.name.capitalize()


_EXTENSIONS = {
    ".vert": ShaderType.VERTEX,
    ".frag": ShaderType.FRAGMENT,
    ".geom": ShaderType.GEOMETRY,
    ".comp": ShaderType.COMPUTE,
}

_DEFAULT_TEXT = {
    ShaderType.VERTEX: (
        "#version 330 core\n"
        "layout (location = 0) in vec3 aPos;\n"
        "void main()\n"
        "{\n"
        "   gl_Position = vec4(aPos.x, aPos.y, aPos.z, 1.0);\n"
        "}"
    ),
    ShaderType.FRAGMENT: (
        "#version 330 core\n"
        "out vec4 FragColor;\n"
        "void main() {\n"
        "\tFragColor = vec4(1.0f, 0.5f, 0.2f, 1.0f);\n"
        "}"
    ),
}


def shader_type_for_path(path: PathLike) -> ShaderType:
    """Stage implied by a file's extension; raises ShaderError if unknown."""
    extension = Path(path).suffix
    try:
        return _EXTENSIONS[extension]
    except KeyError:
        raise ShaderError(f"Unknown shader format: {extension}.") from None


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _read_file(path: Path) -> str:
    return "".join(f"{line}\n" for line in _split_lines(path.read_text(encoding="utf-8")))


class ShaderSource:
    """Shader text of one stage together with its preprocessed form.

    Lines starting with ``//#include`` pull in a file relative to the shader's
    directory, ``//#if NAME`` ... ``//#endif`` keeps a block only when the flag
    ``NAME`` is set, and ``//{NAME}`` is replaced by a value macro.
    """

    def __init__(self, shader_type: ShaderType, text: Optional[str] = None,
                 path: Optional[PathLike] = None) -> None:
        self.type = shader_type
        self.text = _DEFAULT_TEXT.get(shader_type, "") if text is None else text
        self.path = Path(path) if path is not None else None
        self._flags: dict[str, bool] = {}
        self._values: dict[str, str] = {}
        self.formatted = ""
        self._refresh()

    @classmethod
    def from_file(cls, path: PathLike) -> ShaderSource:
        """Load a shader whose stage is given by the file extension."""
        path = Path(path)
        if not path.exists():
            raise ShaderError(f"Shader file does not exist: {path}")
        text = _read_file(path)
        return cls(shader_type_for_path(path), text, path)

    def set_macro(self, name: str, value: Union[bool, str]) -> None:
        """Set a flag (bool) or value (str) macro and reformat."""
        if isinstance(value, bool):
            self._flags[name] = value
        elif isinstance(value, str):
            self._values[name] = value
        else:
            raise TypeError(f"macro value must be bool or str, not {type(value).__name__}")
        self._refresh()

    def update_text(self, text: str) -> None:
        """Replace the source text and reformat."""
        self.text = text
        self._refresh()

    def update_from_file(self, path: PathLike) -> None:
        """Reload the source from a file of the same stage."""
        path = Path(path)
        shader_type = shader_type_for_path(path)
        if shader_type is not self.type:
            raise ShaderError(
                f"Trying to load {shader_type.label} shader as a {self.type.label} shader. "
                f"Shader path: {path}"
            )
        if not path.exists():
            raise ShaderError(f"Shader file does not exist: {path}")
        self.path = path
        self.text = _read_file(path)
        self._refresh()

    def format(self, text: str) -> str:
        """Preprocess text using this shader's macros and directory."""
        result: list[str] = []
        lines = iter(_split_lines(text))
        for line in lines:
            if not line.startswith("//#"):
                result.append(self._expand_macros(line) + "\n")
                continue

            directive = line.split(" ", 1)[0]
            if directive == "//#include":
                result.append(self._include(line[line.find(" ") + 1:]))
            elif directive == "//#if":
                macro = line[6:]
                block: list[str] = []
                for inner in lines:
                    if inner.startswith("//#endif"):
                        break
                    block.append(inner + "\n")
                else:
                    raise ShaderError(f"Unterminated //#if {macro} in shader: {self._where()}")
                if self._flags.get(macro, False):
                    result.append(self.format("".join(block)))
        return "".join(result)

    def _refresh(self) -> None:
        self.formatted = self.format(self.text)

    def _where(self) -> str:
        return str(self.path) if self.path is not None else "<memory>"

    def _include(self, relative: str) -> str:
        base = self.path.parent if self.path is not None else Path()
        target = base / relative
        if not target.exists():
            logger.warning("Failed to include file in a shader. Filepath: %s", target)
            return ""
        content = self.format(_read_file(target))
        logger.debug("Included %s:\n%s", target, content)
        return content

    def _expand_macros(self, line: str) -> str:
        while "//{" in line:
            first = min(line.find("/"), line.find("{"))
            close = line.find("}", first)
            end = len(line) if close < 0 else close
            macro = line[first + 3:end]
            value = self._values.get(macro, "")
            if not value:
                logger.warning("Macro: %s, was not initialized in a shader: %s.",
                               macro, self._where())
                line = line[:first] + line[end + 2:]
            else:
                space = line.rfind(" ", 0, first + 1)
                if space < 0:
                    raise ShaderError(
                        f"Macro {macro} has no preceding space in shader: {self._where()}"
                    )
                line = line[:space] + value + line[end + 1:]
        return line