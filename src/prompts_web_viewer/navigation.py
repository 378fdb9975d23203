"""Fixed navigation taxonomy and tree construction."""

from collections.abc import Iterable
from typing import Any, Union

from prompts_web_viewer.models import Document

GETTING_STARTED = "Getting Started"
PROMPT_CATEGORIES = "Prompt Categories"
SETUP_GUIDES = "Setup Guides"
SETUP_OVERVIEW = "Overview"

OVERVIEW_FILENAME = "README.md"
SETUP_GUIDES_DIR = "setup-guides"

# First path segment -> category of the "Prompt Categories" section.
PROMPT_CATEGORY_DIRS: dict[str, str] = {
    "coding-fundamentals": "Coding Fundamentals",
    "debugging-troubleshooting": "Debugging & Troubleshooting",
    "code-review-optimization": "Code Review & Optimization",
    "architecture-design": "Architecture & Design",
    "testing": "Testing",
    "templates": "Templates",
}

# Second path segment under setup-guides/ -> category of "Setup Guides".
SETUP_GUIDE_DIRS: dict[str, str] = {
    "ide-configuration": "IDE Configuration",
    "claude-code": "Claude Code",
    "automation-tools": "Automation Tools",
    "project-templates": "Project Templates",
    "cloud-deployment": "Cloud Deployment",
    "development-environment": "Development Environment",
}

SOURCE_DIRECTORIES: frozenset[str] = frozenset([*PROMPT_CATEGORY_DIRS, SETUP_GUIDES_DIR])

Section = Union[list[Document], dict[str, list[Document]]]
NavigationTree = dict[str, Section]


def classify(path: str) -> tuple[str, str] | None:
    """Map a root-relative document path to its section and category.

    Args:
        path: Slash-separated path relative to the corpus root.

    Returns:
        ``(section, category)`` tuple, or None when no taxonomy rule applies.
        The root overview document is handled by :func:`build_navigation_tree`
        and is not classified here.
    """
    parts = path.split("/")
    if parts[0] in PROMPT_CATEGORY_DIRS:
        return PROMPT_CATEGORIES, PROMPT_CATEGORY_DIRS[parts[0]]
    if parts[0] == SETUP_GUIDES_DIR and len(parts) > 1:
        if parts[1] in SETUP_GUIDE_DIRS:
            return SETUP_GUIDES, SETUP_GUIDE_DIRS[parts[1]]
        if parts[1] == OVERVIEW_FILENAME:
            return SETUP_GUIDES, SETUP_OVERVIEW
    return None


def build_navigation_tree(documents: Iterable[Document]) -> NavigationTree:
    """Group documents into the fixed section/category taxonomy.

    Documents matching no rule are left out of the tree. The result depends
    only on the document paths and their order, so rebuilding from an
    unchanged corpus yields an equal tree.

    Args:
        documents: Corpus in traversal order.

    Returns:
        Ordered mapping of section name to documents or to categories.
    """
    documents = list(documents)
    sections: dict[str, dict[str, list[Document]]] = {
        PROMPT_CATEGORIES: {name: [] for name in PROMPT_CATEGORY_DIRS.values()},
        SETUP_GUIDES: {name: [] for name in SETUP_GUIDE_DIRS.values()},
    }
    tree: NavigationTree = dict(sections)

    overview = next((doc for doc in documents if doc.path == OVERVIEW_FILENAME), None)
    if overview is not None:
        tree[GETTING_STARTED] = [overview]

    for doc in documents:
        placement = classify(doc.path)
        if placement is None:
            continue
        section, category = placement
        categories = sections[section]
        if category == SETUP_OVERVIEW:
            categories[SETUP_OVERVIEW] = [doc]
        else:
            categories[category].append(doc)

    return tree


def navigation_to_dict(tree: NavigationTree) -> dict[str, Any]:
    """Serialise a navigation tree into its JSON shape."""
    payload: dict[str, Any] = {}
    for section, content in tree.items():
        if isinstance(content, dict):
            payload[section] = {
                category: [doc.to_dict() for doc in docs] for category, docs in content.items()
            }
        else:
            payload[section] = [doc.to_dict() for doc in content]
    return payload
