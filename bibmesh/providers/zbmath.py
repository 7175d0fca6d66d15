# bibmesh/providers/zbmath.py
from bibmesh.providers.base import Provider


class ZbMath(Provider):
    """zbMATH Open query transformer."""

    name = "zbmath"
    BASE_URL = "https://zbmath.org/bibtexoutput/"

    def _load_from_env(self) -> str | None:
        return None  # zbMATH doesn't require API key

    def logical_and_operator(self) -> str | None:
        return " & "

    def logical_or_operator(self) -> str | None:
        return " | "

    def logical_not_operator(self) -> str | None:
        return "!"

    def handle_author(self, author: str) -> str | None:
        return f"au:{author}"

    def handle_title(self, title: str) -> str | None:
        return f"ti:{title}"

    def handle_journal(self, journal: str) -> str | None:
        return f"so:{journal}"

    def handle_year(self, year: str) -> str | None:
        return f"py:{year}"

    def handle_year_range(self, start: int, end: int) -> str | None:
        return f"py:{start}-{end}"

    def handle_unfielded_term(self, term: str) -> str | None:
        return f"any:{term}"

    def request_params(self, query: str, max_results: int) -> dict[str, str | int]:
        return {
            "q": query,
            "start": 0,
            "count": min(max_results, 200),  # zbMATH max page size
        }
