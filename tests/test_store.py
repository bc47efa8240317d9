from core import store as actions
from core.store import Store
from models.state import AppState
from models.user import User


def _state(count=25, **kwargs):
    users = tuple(User(id=i, name=f"user{i}") for i in range(1, count + 1))
    return AppState(users=users, loading=False, **kwargs)


def test_update_functions_return_new_state():
    before = _state()
    after = actions.set_search(before, "user1")
    assert after is not before
    assert before.search_term == ""
    assert after.search_term == "user1"


def test_search_resets_page():
    state = _state(current_page=3)
    assert actions.set_search(state, "user").current_page == 1


def test_collection_change_resets_page():
    state = _state(current_page=3)
    assert actions.set_users(state, state.users[:-1]).current_page == 1


def test_go_to_page_ignores_out_of_range():
    state = _state(current_page=1)
    assert actions.go_to_page(state, 3, 10).current_page == 3
    assert actions.go_to_page(state, 4, 10) is state
    assert actions.go_to_page(state, 0, 10) is state


def test_go_to_page_on_empty_collection_stays_on_first():
    state = _state(count=0)
    assert actions.go_to_page(state, 1, 10).current_page == 1
    assert actions.go_to_page(state, 2, 10) is state


def test_form_open_and_close():
    user = User(id=5, name="Eve")
    state = actions.set_form_error(_state(), "old")
    opened = actions.open_form(state, user)
    assert opened.form_open and opened.editing_user == user
    assert opened.form_error == ""
    closed = actions.close_form(opened)
    assert not closed.form_open
    assert closed.editing_user is None


def test_loading_clears_error_only():
    state = _state(error="boom", success="yay")
    started = actions.loading_started(state)
    assert started.loading and started.error == "" and started.success == "yay"
    assert not actions.loading_finished(started).loading


def test_delete_request_and_cancel():
    state = actions.request_delete(_state(), 4)
    assert state.pending_delete_id == 4
    assert actions.cancel_delete(state).pending_delete_id is None


def test_store_dispatch_swaps_state():
    initial = _state()
    store = Store(initial)
    new_state = store.dispatch(actions.set_error, "oops")
    assert store.state is new_state
    assert new_state.error == "oops"
    assert initial.error == ""
