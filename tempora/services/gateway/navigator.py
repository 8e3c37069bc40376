import logging

logger = logging.getLogger(__name__)


class RouteRecorder:
    def __init__(self, initial: str = "/events/new") -> None:
        self.history: list[str] = [initial]

    @property
    def current(self) -> str:
        return self.history[-1]

    def navigate_to(self, route: str) -> None:
        logger.debug("Navigating %s -> %s", self.current, route)
        self.history.append(route)
