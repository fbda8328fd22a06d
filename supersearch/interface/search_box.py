# supersearch/interface/search_box.py

from typing import Callable, List, Optional, Union

from supersearch.application.suggestion_engine import SuggestionEngine
from supersearch.domain.interfaces import ResultsViewPort
from supersearch.domain.models import Suggestion


class SearchBox:
    """
    Binds one text input to the suggestion engine.

    The box owns no data of its own beyond the suggestions currently on
    screen. Every input change is a fresh engine query; the engine is
    synchronous once loaded, so there is no debouncing here.
    """

    def __init__(
        self,
        engine: SuggestionEngine,
        view: ResultsViewPort,
        navigate: Callable[[str], None],
    ):
        self._engine = engine
        self._view = view
        self._navigate = navigate
        self._suggestions: List[Suggestion] = []
        self._value = ""
        self.is_open = False

    @property
    def value(self) -> str:
        return self._value

    @property
    def suggestions(self) -> List[Suggestion]:
        return list(self._suggestions)

    # ─── Overlay ─────────────────────────────────────────────────────────────

    def open(self) -> None:
        self._engine.initialize()
        self._view.show()
        self.is_open = True

    def close(self) -> None:
        self._suggestions = []
        self._view.clear()
        self._view.hide()
        self.is_open = False

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    # ─── Input / selection ───────────────────────────────────────────────────

    def on_input(self, value: str) -> List[Suggestion]:
        self._value = value
        if not value.strip():
            self._suggestions = []
            self._view.clear()
            return []

        self._engine.initialize()
        self._suggestions = self._engine.query(value)
        self._view.render(self._suggestions)
        return list(self._suggestions)

    def select(self, choice: Union[int, Suggestion]) -> Optional[Suggestion]:
        """Emit the "selected" event for a rendered suggestion and navigate to its link."""
        if isinstance(choice, Suggestion):
            selected = choice
        elif isinstance(choice, int) and 0 <= choice < len(self._suggestions):
            selected = self._suggestions[choice]
        else:
            return None

        self._navigate(selected.link)
        return selected
