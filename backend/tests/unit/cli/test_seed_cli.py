"""Tests for the ``flask seed demo`` command."""

from __future__ import annotations

from sqlalchemy import func, select

from vidshare.models.subscription import Subscription
from vidshare.models.user import User
from vidshare.models.video import Video


def _count(session, model) -> int:
    return session.execute(select(func.count(model.id))).scalar_one()


class TestSeedDemo:
    def test_seed_is_idempotent(self, app, session):
        runner = app.test_cli_runner()

        first = runner.invoke(args=["seed", "demo"])
        assert first.exit_code == 0, first.output
        assert "users" in first.output
        assert "created= 3" in first.output

        counts = (_count(session, User), _count(session, Video), _count(session, Subscription))

        second = runner.invoke(args=["seed", "demo"])
        assert second.exit_code == 0, second.output
        assert "existing= 3" in second.output
        assert (
            _count(session, User),
            _count(session, Video),
            _count(session, Subscription),
        ) == counts

    def test_seeded_users_can_log_in(self, app, session):
        app.test_cli_runner().invoke(args=["seed", "demo"])

        user = session.execute(select(User).where(User.username == "alexm")).scalar_one()
        assert user.verify_password("devPass123!")

    def test_refuses_production(self, app, session, monkeypatch):
        monkeypatch.setitem(app.config, "APP_ENV", "production")

        result = app.test_cli_runner().invoke(args=["seed", "demo"])

        assert result.exit_code != 0
        assert "non-production" in result.output
        assert _count(session, User) == 0
