from fastapi import Request

from .services.cache import PageCache
from .services.navigation import Navigator, RaisingNavigator


def get_page_cache(request: Request) -> PageCache:
    return request.app.state.page_cache


def get_navigator() -> Navigator:
    return RaisingNavigator()
