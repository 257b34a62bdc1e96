import pytest

from ionbinary.context import Context, ContextStack


def test_empty_stack_is_top_level():
    stack = ContextStack()
    assert stack.peek() is Context.AT_TOP_LEVEL
    assert len(stack) == 0


def test_push_and_peek():
    stack = ContextStack()
    stack.push(Context.IN_LIST)
    assert stack.peek() is Context.IN_LIST
    stack.push(Context.IN_STRUCT)
    assert stack.peek() is Context.IN_STRUCT
    assert len(stack) == 2


def test_pop_returns_to_previous():
    stack = ContextStack()
    stack.push(Context.IN_SEXP)
    stack.push(Context.IN_LIST)
    assert stack.pop() is Context.IN_LIST
    assert stack.peek() is Context.IN_SEXP
    assert stack.pop() is Context.IN_SEXP
    assert stack.peek() is Context.AT_TOP_LEVEL


def test_pop_at_top_level_raises():
    stack = ContextStack()
    with pytest.raises(IndexError):
        stack.pop()


def test_every_context_round_trips_through_stack():
    stack = ContextStack()
    contexts = [Context.IN_STRUCT, Context.IN_LIST, Context.IN_SEXP]
    for ctx in contexts:
        stack.push(ctx)
        assert stack.peek() is ctx
    assert len(stack) == len(contexts)
    popped = [stack.pop() for _ in contexts]
    assert popped == list(reversed(contexts))
    assert stack.peek() is Context.AT_TOP_LEVEL