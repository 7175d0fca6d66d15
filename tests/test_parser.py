import pytest

from bibmesh.query.combinators import (
    And,
    Author,
    Journal,
    Not,
    Or,
    Title,
    UnfieldedTerm,
    Year,
    YearRange,
)
from bibmesh.query.errors import MalformedQuery
from bibmesh.query.parser import parse, tokenize


def test_parse_simple_author():
    assert parse("author:Knuth") == Author("Knuth")


def test_parse_field_name_is_case_insensitive():
    assert parse("Title:TAOCP") == Title("TAOCP")


def test_parse_journal():
    assert parse("journal:Nature") == Journal("Nature")


def test_parse_field_binds_following_words():
    assert parse("author:Donald Knuth") == Author("Donald Knuth")


def test_parse_quoted_field_value():
    assert parse('title:"deep learning"') == Title("deep learning")


def test_parse_quoted_value_after_space():
    assert parse('title: "deep learning"') == Title("deep learning")


def test_parse_unfielded_words_form_one_term():
    assert parse("machine learning") == UnfieldedTerm("machine learning")


def test_parse_unknown_field_is_unfielded():
    assert parse("doi:10.1000/xyz") == UnfieldedTerm("doi:10.1000/xyz")


def test_parse_year():
    assert parse("year:2018") == Year("2018")


def test_parse_year_range():
    assert parse("year-range:2012-2015") == YearRange(2012, 2015)


def test_parse_year_takes_single_word():
    assert parse("year:2018 graphs") == And(Year("2018"), UnfieldedTerm("graphs"))


def test_parse_juxtaposition_is_and():
    assert parse("author:Knuth title:TAOCP") == And(Author("Knuth"), Title("TAOCP"))


def test_parse_phrase_then_field():
    q = parse('"graph theory" author:Erdos')
    assert q == And(UnfieldedTerm("graph theory"), Author("Erdos"))


def test_parse_and():
    q = parse("title:TAOCP AND author:Knuth")
    assert q == And(Title("TAOCP"), Author("Knuth"))


def test_parse_or():
    assert parse("a OR b") == Or(UnfieldedTerm("a"), UnfieldedTerm("b"))


def test_parse_keywords_are_case_insensitive():
    assert parse("a and b") == And(UnfieldedTerm("a"), UnfieldedTerm("b"))
    assert parse("not a") == Not(UnfieldedTerm("a"))


def test_parse_not():
    assert parse("NOT author:Smith") == Not(Author("Smith"))


def test_parse_and_not():
    q = parse("title:neural AND NOT author:Smith")
    assert q == And(Title("neural"), Not(Author("Smith")))


def test_parse_and_binds_tighter_than_or():
    q = parse("a OR b AND c")
    assert q == Or(UnfieldedTerm("a"), And(UnfieldedTerm("b"), UnfieldedTerm("c")))


def test_parse_not_binds_tightest():
    q = parse("NOT a AND b")
    assert q == And(Not(UnfieldedTerm("a")), UnfieldedTerm("b"))


def test_parse_or_is_left_associative():
    a, b, c = UnfieldedTerm("a"), UnfieldedTerm("b"), UnfieldedTerm("c")
    assert parse("a OR b OR c") == Or(Or(a, b), c)


def test_parse_with_parentheses():
    q = parse("(title:A OR title:B) AND author:C")
    assert isinstance(q, And)
    assert q.left == Or(Title("A"), Title("B"))
    assert q.right == Author("C")


def test_parse_complex_query():
    q = parse('author:Knuth title:"art of programming" NOT journal:Nature year-range:1968-1973')
    assert q == And(
        And(
            And(Author("Knuth"), Title("art of programming")),
            Not(Journal("Nature")),
        ),
        YearRange(1968, 1973),
    )


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        '"unterminated',
        'title:"open',
        'title:""',
        "year-range:2015-2012",
        "year-range:12-15",
        "year-range:2012-2015-2018",
        "year-range:abc",
        "year-range:",
        "author:",
        "year:",
        "a AND",
        "OR b",
        "NOT",
        "a AND OR b",
        "(a",
        "a)",
        "()",
    ],
)
def test_parse_malformed(text):
    with pytest.raises(MalformedQuery):
        parse(text)


def test_malformed_query_carries_fragment():
    with pytest.raises(MalformedQuery) as excinfo:
        parse("author:Knuth year-range:12-15")
    assert excinfo.value.fragment == "year-range:12-15"
    assert isinstance(excinfo.value, ValueError)


def test_tokenize_kinds():
    kinds = [t.kind for t in tokenize('(author:Knuth OR "a b") AND NOT x')]
    assert kinds == ["lparen", "field", "or", "phrase", "rparen", "and", "not", "word"]
