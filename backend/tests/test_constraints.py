import pytest
from app.openapi_parts import Choices, Format, Length, Pattern, Range
from app.openapi_parts.constraints import constraint_keywords, constraint_problems


def test_keywords_use_openapi_vocabulary():
    kw = constraint_keywords((Length(1, 100), Pattern('^[A-Z]+$'), Format('email')))
    assert kw == {'minLength': 1, 'maxLength': 100, 'pattern': '^[A-Z]+$', 'format': 'email'}
    assert constraint_keywords((Range(minimum=1),)) == {'minimum': 1}
    assert constraint_keywords((Choices(['a', 'b']),)) == {'enum': ['a', 'b']}


def test_choices_are_frozen():
    c = Choices(['active', 'inactive'])
    assert c.values == ('active', 'inactive')
    assert hash(c) == hash(Choices(('active', 'inactive')))


@pytest.mark.parametrize('constraints,kind', [
    ((Length(1, 100),), 'string'),
    ((Length(max=100),), 'string'),
    ((Length(3, 3),), 'string'),
    ((Range(1, 100),), 'integer'),
    ((Range(0.5, 0.5),), 'number'),
    ((Pattern('^[A-Z]{3}[0-9]{3}$'),), 'string'),
    ((Choices(['active']),), 'string'),
    ((Choices([1, 2]),), 'integer'),
    ((Choices([0.5, 1, 2]),), 'number'),
    ((Format('uuid'),), 'string'),
    ((Format('int64'),), 'integer'),
    ((Format('x-custom'),), 'string'),
    ((Length(1, 10), Pattern('^a'), Format('email')), 'string'),
])
def test_well_formed_constraints(constraints, kind):
    assert constraint_problems(constraints, kind) == []


@pytest.mark.parametrize('constraints,kind,fragment', [
    ((Length(5, 2),), 'string', 'greater than'),
    ((Length(-1),), 'string', 'negative'),
    ((Length(),), 'string', 'without bounds'),
    ((Range(10, 1),), 'integer', 'greater than'),
    ((Range(),), 'number', 'without bounds'),
    ((Pattern('(unclosed'),), 'string', 'does not compile'),
    ((Choices([]),), 'string', 'no allowed values'),
    ((Choices(['a', 'a']),), 'string', 'more than once'),
    ((Format(''),), 'string', 'empty'),
    ((Format('date'),), 'integer', 'does not apply'),
    ((Length(1, 2),), 'integer', 'does not apply'),
    ((Range(1, 2),), 'string', 'does not apply'),
    ((Pattern('a'),), 'array', 'does not apply'),
    ((Length(1), Length(2)), 'string', 'more than one Length'),
    ((Pattern(None),), 'string', 'not a string'),
    ((Range('1', 5),), 'integer', 'not a valid bound'),
    ((Range(True, 5),), 'integer', 'not a valid bound'),
    ((Length(1.5),), 'string', 'not a valid bound'),
    ((Length(max='10'),), 'string', 'not a valid bound'),
    ((Choices([{'a': 1}]),), 'string', 'does not match type'),
    ((Choices(['a']),), 'integer', 'does not match type'),
    ((Format(5),), 'string', 'not a string'),
])
def test_malformed_constraints(constraints, kind, fragment):
    problems = constraint_problems(constraints, kind)
    assert problems
    assert any(fragment in p for p in problems), problems


def test_boolean_is_not_a_duplicate_integer():
    problems = constraint_problems((Choices([1, True]),), 'integer')
    assert problems == ['enum value True does not match type integer']


def test_unhashable_choices_reported():
    problems = constraint_problems((Choices([{'a': 1}, {'a': 1}]),), 'string')
    assert len(problems) == 2
    assert all('does not match type string' in p for p in problems)
