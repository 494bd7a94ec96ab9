"""Page formulas: ListPages, AddPage, RenamePage and CopyPage."""

from typing import Any, List

from .registry import Formula, FormulaRegistry, ParameterSpec, ParameterType, ResultType

PAGE_ID_OR_NAME_HELP = (
    "Prefer using IDs because names can change and there can be multiple pages "
    "with the same name. Use autocomplete to select the page, or use the result "
    "of an earlier AddPage() call."
)


def _list_pages(args: List[Any], context) -> List[List[str]]:
    [limit] = args
    return context.page_operations().list_pages(limit=limit)


def _add_page(args: List[Any], context) -> str:
    name, parent, subtitle, icon_name, image_url, content = args
    return context.page_operations().add_page(
        name=name,
        parent_page_id=parent,
        subtitle=subtitle,
        icon_name=icon_name,
        image_url=image_url,
        content=content,
    )


def _rename_page(args: List[Any], context) -> str:
    page_id_or_name, name, subtitle, icon_name, image_url = args
    return context.page_operations().rename_page(
        page_id_or_name,
        name=name,
        subtitle=subtitle,
        icon_name=icon_name,
        image_url=image_url,
    )


def _copy_page(args: List[Any], context) -> str:
    # Export, poll, download and create run inside one invocation
    source, new_name, parent = args
    return context.page_copier().copy_page(source, new_name, parent_page_id=parent)


def build_registry() -> FormulaRegistry:
    """Create a registry holding the page formulas."""
    registry = FormulaRegistry()

    registry.register(Formula(
        name="ListPages",
        description="Returns a list of all pages in the doc as [ID, name] pairs",
        parameters=[
            ParameterSpec(
                "limit", ParameterType.NUMBER,
                "Maximum number of pages to return (default: 100)",
                optional=True,
            ),
        ],
        result_type=ResultType.ARRAY,
        execute=_list_pages,
    ))

    registry.register(Formula(
        name="AddPage",
        description=(
            "Add a new page. Upon execution, returns an ID of the created page "
            "that you can then use to update it."
        ),
        parameters=[
            ParameterSpec("name", ParameterType.STRING, "Name of the page", optional=True),
            ParameterSpec(
                "parent", ParameterType.STRING, "Parent of this new page",
                optional=True, autocomplete="pages",
            ),
            ParameterSpec("subtitle", ParameterType.STRING, "Subtitle of the page", optional=True),
            ParameterSpec(
                "iconName", ParameterType.STRING, "Name of the icon for this new page",
                optional=True, autocomplete="icons",
            ),
            ParameterSpec("coverImage", ParameterType.IMAGE, "Cover image to use", optional=True),
            ParameterSpec(
                "content", ParameterType.STRING, "Content of the page in Markdown format",
                optional=True,
            ),
        ],
        result_type=ResultType.STRING,
        execute=_add_page,
        is_action=True,
    ))

    registry.register(Formula(
        name="RenamePage",
        description="Rename an existing page",
        parameters=[
            ParameterSpec(
                "pageIdOrName", ParameterType.STRING,
                f"ID or name of the page to rename. {PAGE_ID_OR_NAME_HELP}",
                autocomplete="pages",
            ),
            ParameterSpec("name", ParameterType.STRING, "New name of the page", optional=True),
            ParameterSpec("subtitle", ParameterType.STRING, "New subtitle of the page", optional=True),
            ParameterSpec(
                "iconName", ParameterType.STRING, "New name of the icon for this page",
                optional=True, autocomplete="icons",
            ),
            ParameterSpec("coverImage", ParameterType.IMAGE, "New cover image to use", optional=True),
        ],
        result_type=ResultType.STRING,
        execute=_rename_page,
        is_action=True,
    ))

    registry.register(Formula(
        name="CopyPage",
        description=(
            "Copy a page, including its content, subtitle, icon and cover image. "
            "Returns the ID of the new page."
        ),
        parameters=[
            ParameterSpec(
                "sourcePageIdOrName", ParameterType.STRING,
                f"ID or name of the page to copy. {PAGE_ID_OR_NAME_HELP}",
                autocomplete="pages",
            ),
            ParameterSpec("newName", ParameterType.STRING, "Name of the copy"),
            ParameterSpec(
                "parentPageId", ParameterType.STRING,
                "Parent of the copy (top level when omitted)",
                optional=True, autocomplete="pages",
            ),
        ],
        result_type=ResultType.STRING,
        execute=_copy_page,
        is_action=True,
    ))

    return registry
