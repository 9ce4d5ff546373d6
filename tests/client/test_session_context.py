"""Session Context: token lifecycle and persistence."""

from tracker.client.session import SessionContext
from tracker.infrastructure.security import issue_token

SECRET = "client-test-signing-secret-0123456789ab"


def test_new_session_is_anonymous(tmp_path):
    session = SessionContext.start(tmp_path / "token")
    assert not session.is_authenticated
    assert session.user_id is None


def test_set_persists_and_start_restores(tmp_path):
    path = tmp_path / "token"
    token = issue_token(7, SECRET)
    SessionContext.start(path).set(token, {"id": 7, "name": "Ada", "email": "a@b.io"})

    restored = SessionContext.start(path)
    assert restored.token == token
    assert restored.user is None
    assert restored.user_id == 7


def test_clear_removes_token_file(tmp_path):
    path = tmp_path / "token"
    session = SessionContext.start(path)
    session.set(issue_token(7, SECRET))
    session.clear()
    assert not path.exists()
    assert session.token is None
    assert not session.is_authenticated


def test_user_id_prefers_user_record():
    session = SessionContext(token=issue_token(7, SECRET), user={"id": 8})
    assert session.user_id == 8


def test_undecodable_token_has_no_user_id():
    assert SessionContext(token="garbage").user_id is None


def test_session_without_path_stays_in_memory():
    session = SessionContext.start()
    session.set("t")
    session.clear()
    assert session.token is None
