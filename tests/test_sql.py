"""
Test suite for the SQL building helpers.

Tests cover:
- Partial-update SET clause generation
- Filter WHERE clause generation
- LIKE pattern escaping
- Numbered placeholder binding
"""

import pytest

from app.core.errors import BadRequestError
from app.core.sql import (
    FilterRule,
    bind_numbered,
    contains_ci,
    execute,
    sql_for_filters,
    sql_for_partial_update,
)
from app.crud.company import COMPANY_FILTERS, COMPANY_RANGES
from app.crud.job import JOB_FILTERS


class TestSqlForPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_translates_columns_and_numbers_placeholders(self):
        set_cols, values = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"}
        )

        assert set_cols == '"first_name"=$1, "age"=$2'
        assert values == ["Aliya", 32]

    def test_single_field(self):
        set_cols, values = sql_for_partial_update({"name": "New"}, {})

        assert set_cols == '"name"=$1'
        assert values == ["New"]

    def test_keeps_input_order(self):
        data = {"c": 3, "a": 1, "b": 2}
        set_cols, values = sql_for_partial_update(data, {"a": "col_a"})

        assert set_cols == '"c"=$1, "col_a"=$2, "b"=$3'
        assert values == [3, 1, 2]

    def test_values_are_not_inlined(self):
        set_cols, values = sql_for_partial_update({"name": "x'; DROP TABLE companies; --"}, {})

        assert "DROP" not in set_cols
        assert values == ["x'; DROP TABLE companies; --"]

    def test_null_values_are_positioned(self):
        set_cols, values = sql_for_partial_update({"salary": None}, {})

        assert set_cols == '"salary"=$1'
        assert values == [None]

    def test_empty_data_is_bad_request(self):
        with pytest.raises(BadRequestError):
            sql_for_partial_update({}, {"firstName": "first_name"})


class TestSqlForFilters:
    """Tests for sql_for_filters and the entity rule tables"""

    def test_no_filters(self):
        assert sql_for_filters({}, COMPANY_FILTERS) == ("", [])

    def test_company_filters(self):
        where, values = sql_for_filters(
            {"name": "Net", "minEmployees": 10, "maxEmployees": 500},
            COMPANY_FILTERS,
            ranges=COMPANY_RANGES,
        )

        assert where == "LOWER(name) LIKE $1 ESCAPE '\\' AND num_employees >= $2 AND num_employees <= $3"
        assert values == ["%net%", 10, 500]

    def test_start_offsets_placeholders(self):
        where, values = sql_for_filters({"minSalary": 5}, JOB_FILTERS, start=3)

        assert where == "salary >= $3"
        assert values == [5]

    def test_unbound_rule_adds_no_value(self):
        where, values = sql_for_filters({"title": "eng", "hasEquity": True, "minSalary": 1}, JOB_FILTERS)

        assert where == "LOWER(title) LIKE $1 ESCAPE '\\' AND equity > 0 AND salary >= $2"
        assert values == ["%eng%", 1]

    def test_user_text_is_bound_not_interpolated(self):
        hostile = "' OR 1=1 --"
        where, values = sql_for_filters({"name": hostile}, COMPANY_FILTERS)

        assert hostile not in where
        assert values == [contains_ci(hostile)]

    def test_unknown_key_is_rejected(self):
        with pytest.raises(BadRequestError) as exc_info:
            sql_for_filters({"name": "a", "color": "red"}, COMPANY_FILTERS)

        assert "color" in exc_info.value.message

    def test_inverted_range_is_rejected(self):
        with pytest.raises(BadRequestError) as exc_info:
            sql_for_filters(
                {"minEmployees": 10, "maxEmployees": 1},
                COMPANY_FILTERS,
                ranges=COMPANY_RANGES,
            )

        assert "minEmployees cannot be greater than maxEmployees" in exc_info.value.message

    def test_equal_range_is_allowed(self):
        where, values = sql_for_filters(
            {"minEmployees": 5, "maxEmployees": 5},
            COMPANY_FILTERS,
            ranges=COMPANY_RANGES,
        )

        assert values == [5, 5]

    def test_transform_applies(self):
        rules = {"code": FilterRule("code = {}", str.upper)}
        assert sql_for_filters({"code": "ab"}, rules) == ("code = $1", ["AB"])


class TestContainsCi:
    """Tests for the LIKE pattern helper"""

    def test_lowercases_and_wraps(self):
        assert contains_ci("Net") == "%net%"

    def test_escapes_wildcards(self):
        assert contains_ci("50%_off") == r"%50\%\_off%"

    def test_escapes_escape_char(self):
        assert contains_ci("a\\%") == r"%a\\\%%"

    def test_escaped_pattern_matches_literally(self, db_session):
        for handle, name in (("pct", "100% Fit"), ("bare", "1000 Fit"), ("und", "a_b"), ("plain", "axb")):
            execute(db_session, "INSERT INTO companies (handle, name) VALUES ($1, $2)", [handle, name])

        def matching(term):
            where, values = sql_for_filters({"name": term}, COMPANY_FILTERS)
            rows = execute(db_session, f"SELECT handle FROM companies WHERE {where} ORDER BY handle", values)
            return [row[0] for row in rows]

        assert matching("0%") == ["pct"]
        assert matching("a_b") == ["und"]
        assert matching("%") == ["pct"]


class TestBinding:
    """Tests for numbered placeholder binding"""

    def test_bind_numbered(self):
        sql, params = bind_numbered("SELECT * FROM t WHERE a = $1 AND b = $2", ["x", 2])

        assert sql == "SELECT * FROM t WHERE a = :p1 AND b = :p2"
        assert params == {"p1": "x", "p2": 2}

    def test_double_digit_placeholders(self):
        values = list(range(1, 12))
        sql, params = bind_numbered("$11, $1", values)

        assert sql == ":p11, :p1"
        assert params["p11"] == 11

    def test_missing_value_raises(self):
        with pytest.raises(ValueError):
            bind_numbered("a = $2", ["only one"])

    def test_execute_round_trip(self, db_session):
        execute(
            db_session,
            "INSERT INTO companies (handle, name, num_employees) VALUES ($1, $2, $3)",
            ["q", "it's quoted", 7],
        )

        row = execute(db_session, "SELECT name, num_employees FROM companies WHERE handle = $1", ["q"]).first()

        assert tuple(row) == ("it's quoted", 7)
