"""
Only the root tests directory carries an __init__.py, so `tests.helpers` can be imported
from any test module. Test subdirectories rely on namespace packages (PEP 420) instead,
which is why test module names must stay unique across the tree.
"""
