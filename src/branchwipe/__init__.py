"""Local git branch viewer and wiper.

Features:
- List local branches in the order git reports them
- Delete a branch by its position in the list
- Interactive mode that keeps the list in step with the repository
"""

__version__ = "0.1.0"
