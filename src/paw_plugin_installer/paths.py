"""
Path portabilization for registry entries.

Paths that live under the install root (the vendor directory) are stored with
the root replaced by ``VENDOR_DIR_PLACEHOLDER``, so a registry file stays valid
when the whole install root is copied or moved elsewhere.

    portabilize('/app/vendor/acme/widgets/src', '/app/vendor')
        -> '<vendor-dir>/acme/widgets/src'
    resolve('<vendor-dir>/acme/widgets/src', '/srv/vendor')
        -> '/srv/vendor/acme/widgets/src'

Paths outside the install root pass through unchanged.
"""

import re

VENDOR_DIR_PLACEHOLDER = '<vendor-dir>'

_PREFIX_RE = re.compile(r'^([a-zA-Z]:)?(/*)')


def normalize_path(path: str) -> str:
    """
    Normalize a filesystem path to forward slashes.

    Collapses duplicate separators, '.' segments and resolvable '..'
    segments, and drops any trailing separator. A drive letter or leading
    root is preserved; '..' segments above the root are discarded.
    """
    path = path.replace('\\', '/')
    match = _PREFIX_RE.match(path)
    prefix = (match.group(1) or '') + ('/' if match.group(2) else '')

    parts = []
    for chunk in path[match.end():].split('/'):
        if chunk in ('', '.'):
            continue
        if chunk == '..':
            if parts and parts[-1] != '..':
                parts.pop()
                continue
            if prefix:
                continue
        parts.append(chunk)

    return prefix + '/'.join(parts)


def is_absolute_path(path: str) -> bool:
    """Return True for POSIX roots, Windows drive paths and UNC paths."""
    return path.startswith('/') or path[1:2] == ':' or path.startswith('\\\\')


def _root_prefix(install_root: str) -> str:
    return normalize_path(install_root).rstrip('/')


def is_under(path: str, install_root: str) -> bool:
    """
    Check whether ``path`` equals or is nested under ``install_root``.

    The comparison is separator-aware: '/app/vendor2' is not under '/app/vendor'.
    """
    root = _root_prefix(install_root)
    return (normalize_path(path) + '/').startswith(root + '/')


def portabilize(path: str, install_root: str) -> str:
    """Replace the install root prefix of ``path`` with the placeholder token."""
    if path.startswith(VENDOR_DIR_PLACEHOLDER) or not is_under(path, install_root):
        return path
    return VENDOR_DIR_PLACEHOLDER + normalize_path(path)[len(_root_prefix(install_root)):]


def is_portable(path: str) -> bool:
    """Return True if ``path`` is expressed relative to the placeholder token."""
    if not path.startswith(VENDOR_DIR_PLACEHOLDER):
        return False
    return path[len(VENDOR_DIR_PLACEHOLDER):][:1] in ('', '/')


def resolve(stored_path: str, install_root: str) -> str:
    """
    Expand a portable path against the given (current) install root.

    Non-portable paths are returned unchanged.
    """
    if not is_portable(stored_path):
        return stored_path
    remainder = stored_path[len(VENDOR_DIR_PLACEHOLDER):]
    return (_root_prefix(install_root) + remainder) or '/'
