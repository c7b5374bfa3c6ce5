# Standard Library
import os
import sys

# headless plotting for the utils tests
os.environ.setdefault("MPLBACKEND", "Agg")


def repo_root():
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def add_repo_root_to_sys_path():
    root = repo_root()
    if root not in sys.path:
        sys.path.insert(0, root)
    return root


add_repo_root_to_sys_path()
