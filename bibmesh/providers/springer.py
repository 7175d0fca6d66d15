# bibmesh/providers/springer.py
import os

from bibmesh.providers.base import Provider


class Springer(Provider):
    """Springer Nature metadata API query transformer.

    The API has no range syntax for dates, so year ranges are expanded into
    one ``date:YYYY*`` clause per year joined with OR.
    """

    name = "springer"
    BASE_URL = "https://api.springernature.com/meta/v1/json"
    expands_year_range = True

    def _load_from_env(self) -> str | None:
        return os.getenv("SPRINGER_API_KEY")

    def logical_and_operator(self) -> str | None:
        return " AND "

    def logical_or_operator(self) -> str | None:
        return " OR "

    def logical_not_operator(self) -> str | None:
        return "-"

    def handle_author(self, author: str) -> str | None:
        return f"name:{author}"

    def handle_title(self, title: str) -> str | None:
        return f"title:{title}"

    def handle_journal(self, journal: str) -> str | None:
        return f"journal:{journal}"

    def handle_year(self, year: str) -> str | None:
        return f"date:{year}*"

    def handle_unfielded_term(self, term: str) -> str | None:
        return term

    def request_params(self, query: str, max_results: int) -> dict[str, str | int]:
        if not self._api_key:
            raise ValueError(
                "Springer requires an API key. Set SPRINGER_API_KEY or pass api_key="
            )
        return {
            "q": query,
            "api_key": self._api_key,
            "s": 1,
            "p": min(max_results, 100),  # Springer max page size
        }
