"""Unit tests for the declarative base and the users table."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import UniqueConstraint
from sqlalchemy.dialects import sqlite

from pdao_contracts.constants import NAME_MAX_LENGTH

from pdao.infrastructure.persistence.sqlalchemy.models import UserModel
from pdao.infrastructure.persistence.sqlalchemy.models.base import UTCDateTime


class TestUsersTable:
    def test_unique_constraints_are_named_after_their_column(self):
        names = {
            constraint.name
            for constraint in UserModel.__table__.constraints
            if isinstance(constraint, UniqueConstraint)
        }
        assert names == {"uq_users_email", "uq_users_contact_number", "uq_users_user_id"}

    def test_indexes_are_named(self):
        names = {index.name for index in UserModel.__table__.indexes}
        assert names == {"ix_users_email", "ix_users_form_id"}

    def test_name_columns_hold_fully_escaped_names(self):
        longest = NAME_MAX_LENGTH * len("&quot;")
        for column in ("first_name", "middle_name", "last_name"):
            assert UserModel.__table__.c[column].type.length >= longest

    def test_timestamps_use_utc_type(self):
        assert isinstance(UserModel.__table__.c.created_at.type, UTCDateTime)
        assert isinstance(UserModel.__table__.c.updated_at.type, UTCDateTime)


class TestUTCDateTime:
    def setup_method(self):
        self.type = UTCDateTime()
        self.dialect = sqlite.dialect()

    def test_naive_value_is_read_as_utc(self):
        loaded = self.type.process_result_value(datetime(2024, 6, 1, 8, 30), self.dialect)
        assert loaded == datetime(2024, 6, 1, 8, 30, tzinfo=timezone.utc)

    def test_offset_is_converted_before_storing(self):
        manila = timezone(timedelta(hours=8))
        stored = self.type.process_bind_param(
            datetime(2024, 6, 1, 16, 30, tzinfo=manila),
            self.dialect,
        )

        assert stored.tzinfo == timezone.utc
        assert stored.hour == 8

    def test_none_passes_through(self):
        assert self.type.process_bind_param(None, self.dialect) is None
        assert self.type.process_result_value(None, self.dialect) is None
