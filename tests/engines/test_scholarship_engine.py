"""Ledger Scholarship Engine tests."""

import pytest

from core.context.caller_context import CallerContext
from engines.ledger import ScholarshipLedger

AUTHORITY = CallerContext(actor_id="authority", block_height=1)
ALICE = CallerContext(actor_id="alice", block_height=2)


@pytest.fixture
def ledger():
    return ScholarshipLedger("authority")


def _create(ledger, caller=AUTHORITY, total=100000, award=10000):
    return ledger.create_scholarship(
        caller, "STEM Excellence", "For STEM students", total, award, 350, "STEM",
    )


class TestScholarshipCommands:
    def test_set_active_maps_to_two_command_types(self):
        from engines.scholarship.commands import SetScholarshipActiveRequest

        on = SetScholarshipActiveRequest(scholarship_id=1, active=True)
        off = SetScholarshipActiveRequest(scholarship_id=1, active=False)
        assert on.to_command(AUTHORITY).command_type == (
            "scholarship.scholarship.activate.request"
        )
        assert off.to_command(AUTHORITY).command_type == (
            "scholarship.scholarship.deactivate.request"
        )

    def test_active_must_be_bool(self):
        from engines.scholarship.commands import SetScholarshipActiveRequest

        with pytest.raises(ValueError):
            SetScholarshipActiveRequest(scholarship_id=1, active=1)

    def test_amount_must_be_integer(self):
        from engines.scholarship.commands import FundScholarshipRequest

        with pytest.raises(ValueError, match="amount"):
            FundScholarshipRequest(scholarship_id=1, amount="25000")


class TestCreateScholarship:
    def test_create(self, ledger):
        outcome = _create(ledger)
        assert outcome.to_result() == {"type": "ok", "value": 1}

        scholarship = ledger.get_scholarship(1)
        assert scholarship.name == "STEM Excellence"
        assert scholarship.description == "For STEM students"
        assert scholarship.total_amount == 100000
        assert scholarship.award_amount == 10000
        assert scholarship.remaining_funds == 100000
        assert scholarship.criteria_gpa == 350
        assert scholarship.criteria_field == "STEM"
        assert scholarship.active is True

    def test_total_below_award_is_invalid_amount(self, ledger):
        outcome = _create(ledger, total=5000, award=10000)
        assert outcome.to_result() == {"type": "err", "value": 101}
        assert outcome.reason.code == "INVALID_AMOUNT"
        assert ledger.get_scholarship_count() == 0

    def test_total_equal_to_award_allowed(self, ledger):
        assert _create(ledger, total=10000, award=10000).is_accepted

    def test_non_authority_rejected(self, ledger):
        outcome = _create(ledger, ALICE)
        assert outcome.error_code == 100
        assert ledger.get_scholarship_count() == 0

    def test_authorization_checked_before_amount(self, ledger):
        outcome = _create(ledger, ALICE, total=5000, award=10000)
        assert outcome.error_code == 100


class TestFundScholarship:
    def test_fund_raises_total_and_remaining(self, ledger):
        _create(ledger, total=50000)
        outcome = ledger.fund_scholarship(AUTHORITY, 1, 25000)
        assert outcome.to_result() == {"type": "ok", "value": True}

        scholarship = ledger.get_scholarship(1)
        assert scholarship.total_amount == 75000
        assert scholarship.remaining_funds == 75000

    def test_unknown_scholarship(self, ledger):
        outcome = ledger.fund_scholarship(AUTHORITY, 9, 100)
        assert outcome.to_result() == {"type": "err", "value": 102}

    def test_not_found_before_authorization(self, ledger):
        assert ledger.fund_scholarship(ALICE, 9, 100).error_code == 102

    def test_non_authority_rejected(self, ledger):
        _create(ledger)
        assert ledger.fund_scholarship(ALICE, 1, 100).error_code == 100
        assert ledger.get_scholarship(1).total_amount == 100000

    def test_negative_amount_is_trusted(self, ledger):
        _create(ledger, total=50000)
        ledger.fund_scholarship(AUTHORITY, 1, -5000)
        assert ledger.get_scholarship(1).remaining_funds == 45000


class TestActivation:
    def test_deactivate_and_activate(self, ledger):
        _create(ledger)
        assert ledger.deactivate_scholarship(AUTHORITY, 1).value is True
        assert ledger.get_scholarship(1).active is False
        assert ledger.activate_scholarship(AUTHORITY, 1).value is True
        assert ledger.get_scholarship(1).active is True

    def test_redundant_calls_succeed(self, ledger):
        _create(ledger)
        assert ledger.activate_scholarship(AUTHORITY, 1).is_accepted
        assert ledger.activate_scholarship(AUTHORITY, 1).is_accepted
        assert ledger.get_scholarship(1).active is True

    def test_unknown_scholarship(self, ledger):
        assert ledger.activate_scholarship(AUTHORITY, 2).error_code == 102
        assert ledger.deactivate_scholarship(AUTHORITY, 2).error_code == 102

    def test_non_authority_rejected(self, ledger):
        _create(ledger)
        assert ledger.deactivate_scholarship(ALICE, 1).error_code == 100
        assert ledger.get_scholarship(1).active is True
