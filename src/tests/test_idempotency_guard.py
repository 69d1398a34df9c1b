import pytest

from src.payment_callback.services.idempotency_guard import GuardState, IdempotencyGuard


def test_try_enter_twice_yields_true_then_false():
    guard = IdempotencyGuard()

    assert (guard.try_enter(), guard.try_enter()) == (True, False)


def test_state_transitions():
    guard = IdempotencyGuard()
    assert guard.state is GuardState.NOT_STARTED

    guard.try_enter()
    assert guard.state is GuardState.IN_PROGRESS

    guard.mark_done()
    assert guard.state is GuardState.DONE
    assert guard.try_enter() is False


def test_guards_do_not_share_state():
    first, second = IdempotencyGuard(), IdempotencyGuard()

    assert first.try_enter() is True
    assert second.try_enter() is True


@pytest.mark.asyncio
async def test_run_once_executes_action_a_single_time():
    guard = IdempotencyGuard()
    calls = []

    async def action():
        calls.append(1)
        return "done"

    assert await guard.run_once(action) == "done"
    assert await guard.run_once(action) is None
    assert calls == [1]
    assert guard.state is GuardState.DONE


@pytest.mark.asyncio
async def test_run_once_marks_done_even_when_action_fails():
    guard = IdempotencyGuard()

    async def action():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await guard.run_once(action)

    assert guard.state is GuardState.DONE
    assert await guard.run_once(action) is None
