"""
File names and the file-extension taxonomy.

An extension pool is validated once into ExtensionList or ExtensionGroups;
selection then dispatches on that variant only.
"""

from typing import Any, Mapping, Optional

from .errors import RangeError
from .misc import buffer
from .models import ExtensionGroups, ExtensionList, ExtensionPool, FileWithContent
from .primitives import pickone
from .text import word

EXTENSIONS_TABLE = "file_extensions"


def extension_pool(value: Any) -> ExtensionPool:
    """Validate a caller-supplied pool: a list of names or a mapping of lists."""
    if isinstance(value, (ExtensionList, ExtensionGroups)):
        return value

    if isinstance(value, (list, tuple)):
        if not all(isinstance(ext, str) for ext in value):
            raise TypeError("seedforge: Extensions must be strings")
        return ExtensionList(tuple(value))

    if isinstance(value, Mapping):
        groups = {}
        for key, group in value.items():
            if not isinstance(group, (list, tuple)) or not all(isinstance(ext, str) for ext in group):
                raise TypeError(f"seedforge: Extension group '{key}' must be a list of strings")
            groups[key] = tuple(group)
        return ExtensionGroups(groups)

    raise TypeError("seedforge: Extensions must be a list or a mapping of lists")


def _format_choices(names) -> str:
    quoted = [f"'{name}'" for name in names]
    if len(quoted) == 1:
        return quoted[0]
    return ", ".join(quoted[:-1]) + " or " + quoted[-1]


def select_extension(ctx, pool: ExtensionPool) -> str:
    if isinstance(pool, ExtensionList):
        return pickone(ctx, pool.extensions)
    if isinstance(pool, ExtensionGroups):
        category = pickone(ctx, pool.names)
        return pickone(ctx, pool.groups[category])
    raise TypeError(f"seedforge: Unknown extension pool type {type(pool).__name__}")


def file_extension(ctx, category: Optional[str] = None, extensions: Any = None) -> str:
    """
    Resolve one extension.

    An explicit `extensions` pool wins over `category`; a category must be
    a key of the file_extensions table. With neither, a category is drawn
    first and then an extension from it.
    """
    return _resolve_extension(ctx, category, extensions)


def _resolve_extension(ctx, category: Optional[str], extensions: Any) -> str:
    if extensions is not None:
        return select_extension(ctx, extension_pool(extensions))

    taxonomy = ExtensionGroups(dict(ctx.get(EXTENSIONS_TABLE)))
    if category is not None:
        if category not in taxonomy.groups:
            raise RangeError(
                f"seedforge: Expect file type value to be {_format_choices(taxonomy.names)}"
            )
        return pickone(ctx, taxonomy.groups[category])

    return select_extension(ctx, taxonomy)


def file(
    ctx,
    length: Optional[int] = None,
    extension: Optional[str] = None,
    extensions: Any = None,
    category: Optional[str] = None,
) -> str:
    """A random file name: word + '.' + extension."""
    name = word(ctx, length=length)
    if extension:
        return f"{name}.{extension}"
    return f"{name}.{file_extension(ctx, category=category, extensions=extensions)}"


def file_with_content(
    ctx,
    size: int,
    file_name: Optional[str] = None,
    file_extension: Optional[str] = None,
) -> FileWithContent:
    """A file name plus `size` random bytes."""
    if not isinstance(size, int) or isinstance(size, bool):
        raise TypeError("seedforge: File size must be an integer")

    stem = file_name if file_name is not None else word(ctx)
    ext = file_extension if file_extension is not None else _resolve_extension(ctx, None, None)
    return FileWithContent(file_name=f"{stem}.{ext}", data=buffer(ctx, size))


GENERATORS = {
    "file": file,
    "file_extension": file_extension,
    "file_with_content": file_with_content,
}
