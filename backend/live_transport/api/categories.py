"""Category metadata for the filter panel and marker icons."""

from fastapi import APIRouter

from live_transport.core.categories import Category, style_for
from live_transport.schemas.vehicle import CategoryInfo

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryInfo])
async def list_categories():
    result = []
    for category in Category:
        style = style_for(category)
        result.append(CategoryInfo(
            category=category.value,
            label=style.label,
            route_bound=style.route_bound,
            palette=list(style.palette),
            icon=style.icon_template.format(color=style.palette[0]),
        ))
    return result
