"""
Version information for linelog.

MAJOR/MINOR/PATCH/PHASE are the canonical numbers. Release builds may
append build metadata to __version__:

    MAJOR.MINOR.PATCH[-PHASE][_BRANCH_BUILD-YYYYMMDD-COMMITHASH]

An unstamped checkout carries the bare semantic version.
"""

MAJOR = 0
MINOR = 1
PATCH = 0
PHASE = "alpha"  # None, "alpha", "beta", "rc1", ...

__version__ = "0.1.0-alpha"
__app_name__ = "linelog"


def get_version():
    """Return the full version string, including build info when stamped."""
    return __version__


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


def get_pip_version(version=None):
    """
    Return a PEP 440 version for setuptools.

    - 0.1.0-alpha                          -> 0.1.0a0
    - 0.1.0-alpha_main_4-20261018-hash     -> 0.1.0a0
    - 0.1.0-alpha_dev_4-20261018-hash      -> 0.1.0a0.dev4
    """
    version = __version__ if version is None else version
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base += {"alpha": "a0", "beta": "b0"}.get(PHASE, PHASE)

    if "_" not in version:
        return base

    _, branch, build_info = (version.split("_", 2) + ["", ""])[:3]
    if branch == "main":
        return base
    build_num = build_info.split("-")[0] or "0"
    return f"{base}.dev{build_num}"


VERSION = get_version()
BASE_VERSION = get_base_version()
PIP_VERSION = get_pip_version()
