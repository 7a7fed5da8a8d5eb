from .factory import create_dispatcher
from .routing import select_elevator
from .scheduler import Dispatcher

__all__ = ["Dispatcher", "create_dispatcher", "select_elevator"]
