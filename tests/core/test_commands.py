"""
Ledger Command Layer - Tests
==============================
Command structure, outcomes, dispatcher ordering and bus orchestration.
"""

from __future__ import annotations

import uuid
from typing import Any

import pytest

from core.commands.base import (
    Command,
    build_command,
    derive_source_engine,
    require_int_field,
    require_str_field,
)
from core.commands.bus import CommandBus, NoHandlerRegistered
from core.commands.dispatcher import CommandDispatcher
from core.commands.outcomes import CommandOutcome, CommandStatus
from core.commands.rejection import (
    ERR_NOT_AUTHORIZED,
    ReasonCode,
    RejectionReason,
)
from core.context.caller_context import CallerContext
from core.context.ledger_context import LedgerContext


# ══════════════════════════════════════════════════════════════
# TEST INFRASTRUCTURE - STUBS
# ══════════════════════════════════════════════════════════════

AUTHORITY = "authority"
STUDENT = "student-1"
FUND_REQUEST = "scholarship.scholarship.fund.request"


class StubEngineService:
    """Stub engine service that records execute calls."""

    def __init__(self, return_value: Any = True):
        self.executed_commands = []
        self.return_value = return_value

    def execute(self, command: Command) -> Any:
        self.executed_commands.append(command)
        return self.return_value


def _rejection(name: str = "stub_policy") -> RejectionReason:
    return RejectionReason(
        code="STUB_REJECTED",
        error_code=999,
        message="Rejected by stub.",
        policy_name=name,
    )


def _command(actor_id: str = AUTHORITY, **overrides) -> Command:
    fields = dict(
        command_id=uuid.uuid4(),
        command_type=FUND_REQUEST,
        caller=CallerContext(actor_id=actor_id, block_height=5),
        payload={"scholarship_id": 1, "amount": 100},
        source_engine="scholarship",
    )
    fields.update(overrides)
    return Command(**fields)


@pytest.fixture
def dispatcher():
    return CommandDispatcher(LedgerContext(authority_id=AUTHORITY))


@pytest.fixture
def command_bus(dispatcher):
    return CommandBus(dispatcher)


# ══════════════════════════════════════════════════════════════
# COMMAND STRUCTURE
# ══════════════════════════════════════════════════════════════

class TestCommandStructure:
    def test_valid_command(self):
        command = _command()
        assert command.actor_id == AUTHORITY
        assert command.block_height == 5

    def test_command_type_without_request_suffix(self):
        with pytest.raises(ValueError, match=".request"):
            _command(command_type="scholarship.scholarship.funded")

    def test_command_type_too_short(self):
        with pytest.raises(ValueError, match="4 segments"):
            _command(command_type="scholarship.fund.request")

    def test_namespace_mismatch(self):
        with pytest.raises(ValueError, match="does not match"):
            _command(source_engine="applicant")

    def test_command_id_must_be_uuid(self):
        with pytest.raises(ValueError, match="UUID"):
            _command(command_id="not-a-uuid")

    def test_caller_must_be_caller_context(self):
        with pytest.raises(ValueError, match="CallerContext"):
            _command(caller="authority")

    def test_payload_must_be_dict(self):
        with pytest.raises(TypeError):
            _command(payload=[1, 2])

    def test_command_is_frozen(self):
        command = _command()
        with pytest.raises(AttributeError):
            command.payload = {}

    def test_build_command_derives_source_engine(self):
        command = build_command(
            FUND_REQUEST, {"scholarship_id": 1},
            caller=CallerContext(actor_id=AUTHORITY),
        )
        assert command.source_engine == "scholarship"
        assert isinstance(command.command_id, uuid.UUID)

    def test_derive_source_engine(self):
        assert derive_source_engine(
            "disbursement.disbursement.process.request"
        ) == "disbursement"


class TestFieldChecks:
    def test_int_field_rejects_bool(self):
        with pytest.raises(ValueError, match="integer"):
            require_int_field(True, "gpa")

    def test_int_field_rejects_str(self):
        with pytest.raises(ValueError, match="integer"):
            require_int_field("380", "gpa")

    def test_str_field_rejects_int(self):
        with pytest.raises(ValueError, match="string"):
            require_str_field(5, "name")


# ══════════════════════════════════════════════════════════════
# CONTEXTS
# ══════════════════════════════════════════════════════════════

class TestCallerContext:
    def test_defaults(self):
        caller = CallerContext(actor_id=STUDENT)
        assert caller.block_height == 0
        assert caller.is_authorized_institution is False

    def test_empty_actor_rejected(self):
        with pytest.raises(ValueError):
            CallerContext(actor_id="")

    def test_block_height_is_opaque(self):
        assert CallerContext(actor_id=STUDENT, block_height=-1).block_height == -1

    def test_block_height_must_be_int(self):
        with pytest.raises(ValueError, match="integer"):
            CallerContext(actor_id=STUDENT, block_height="7")
        with pytest.raises(ValueError, match="integer"):
            CallerContext(actor_id=STUDENT, block_height=True)

    def test_institution_flag_must_be_bool(self):
        with pytest.raises(ValueError):
            CallerContext(actor_id=STUDENT, is_authorized_institution="yes")

    def test_at_keeps_identity(self):
        caller = CallerContext(actor_id=STUDENT, is_authorized_institution=True)
        later = caller.at(42)
        assert later.block_height == 42
        assert later.actor_id == STUDENT
        assert later.is_authorized_institution is True


class TestLedgerContext:
    def test_is_authority(self):
        context = LedgerContext(authority_id=AUTHORITY)
        assert context.is_authority(AUTHORITY)
        assert not context.is_authority(STUDENT)

    def test_authority_required(self):
        with pytest.raises(ValueError):
            LedgerContext(authority_id="")


# ══════════════════════════════════════════════════════════════
# OUTCOMES
# ══════════════════════════════════════════════════════════════

class TestCommandOutcome:
    def test_accepted_result(self):
        outcome = CommandOutcome.accepted(uuid.uuid4(), 7)
        assert outcome.is_accepted
        assert outcome.status == CommandStatus.ACCEPTED
        assert outcome.error_code is None
        assert outcome.to_result() == {"type": "ok", "value": 7}

    def test_rejected_result(self):
        outcome = CommandOutcome.rejected(uuid.uuid4(), _rejection())
        assert outcome.is_rejected
        assert outcome.error_code == 999
        assert outcome.to_result() == {"type": "err", "value": 999}

    def test_rejected_requires_reason(self):
        with pytest.raises(ValueError, match="RejectionReason"):
            CommandOutcome(command_id=uuid.uuid4(), status=CommandStatus.REJECTED)

    def test_accepted_forbids_reason(self):
        with pytest.raises(ValueError, match="must NOT"):
            CommandOutcome(
                command_id=uuid.uuid4(),
                status=CommandStatus.ACCEPTED,
                reason=_rejection(),
            )


class TestRejectionReason:
    def test_to_dict(self):
        reason = RejectionReason(
            code=ReasonCode.NOT_AUTHORIZED,
            error_code=ERR_NOT_AUTHORIZED,
            message="nope",
            policy_name="authority_only_guard",
        )
        assert reason.to_dict() == {
            "code": "NOT_AUTHORIZED",
            "error_code": 100,
            "message": "nope",
            "policy_name": "authority_only_guard",
        }

    def test_error_code_must_be_int(self):
        with pytest.raises(ValueError, match="integer"):
            RejectionReason(
                code="X", error_code="100", message="m", policy_name="p",
            )


# ══════════════════════════════════════════════════════════════
# DISPATCHER
# ══════════════════════════════════════════════════════════════

class TestDispatcher:
    def test_no_policies_passes(self, dispatcher):
        assert dispatcher.evaluate(_command()) is None

    def test_first_rejection_wins(self, dispatcher):
        calls = []

        def first(command, context):
            calls.append("first")
            return _rejection("first")

        def second(command, context):
            calls.append("second")
            return _rejection("second")

        dispatcher.register_policy(FUND_REQUEST, first)
        dispatcher.register_policy(FUND_REQUEST, second)

        rejection = dispatcher.evaluate(_command())
        assert rejection.policy_name == "first"
        assert calls == ["first"]

    def test_policies_are_per_command_type(self, dispatcher):
        dispatcher.register_policy(
            "applicant.applicant.verify.request",
            lambda command, context: _rejection(),
        )
        assert dispatcher.evaluate(_command()) is None

    def test_policy_receives_context(self, dispatcher):
        seen = []
        dispatcher.register_policy(
            FUND_REQUEST, lambda command, context: seen.append(context),
        )
        dispatcher.evaluate(_command())
        assert seen == [dispatcher.context]

    def test_wrong_return_type_raises(self, dispatcher):
        dispatcher.register_policy(FUND_REQUEST, lambda command, context: "no")
        with pytest.raises(TypeError, match="RejectionReason"):
            dispatcher.evaluate(_command())

    def test_non_callable_policy_refused(self, dispatcher):
        with pytest.raises(TypeError):
            dispatcher.register_policy(FUND_REQUEST, "not-callable")

    def test_policies_for(self, dispatcher):
        def policy(command, context):
            return None

        dispatcher.register_policy(FUND_REQUEST, policy)
        assert dispatcher.policies_for(FUND_REQUEST) == (policy,)
        assert dispatcher.policies_for("x.y.z.request") == ()


# ══════════════════════════════════════════════════════════════
# BUS
# ══════════════════════════════════════════════════════════════

class TestCommandBus:
    def test_accepted_calls_handler(self, command_bus):
        service = StubEngineService(return_value=3)
        command_bus.register_handler(FUND_REQUEST, service)

        command = _command()
        outcome = command_bus.handle(command)

        assert outcome.is_accepted
        assert outcome.value == 3
        assert outcome.command_id == command.command_id
        assert service.executed_commands == [command]

    def test_rejected_never_executes(self, command_bus, dispatcher):
        service = StubEngineService()
        command_bus.register_handler(FUND_REQUEST, service)
        dispatcher.register_policy(
            FUND_REQUEST, lambda command, context: _rejection(),
        )

        outcome = command_bus.handle(_command())

        assert outcome.is_rejected
        assert outcome.reason.policy_name == "stub_policy"
        assert service.executed_commands == []

    def test_no_handler_raises(self, command_bus):
        with pytest.raises(NoHandlerRegistered):
            command_bus.handle(_command())

    def test_handler_type_must_be_request(self, command_bus):
        with pytest.raises(ValueError):
            command_bus.register_handler(
                "scholarship.scholarship.funded.v1", StubEngineService(),
            )

    def test_handler_needs_execute(self, command_bus):
        with pytest.raises(TypeError):
            command_bus.register_handler(FUND_REQUEST, object())

    def test_has_handler(self, command_bus):
        assert not command_bus.has_handler(FUND_REQUEST)
        command_bus.register_handler(FUND_REQUEST, StubEngineService())
        assert command_bus.has_handler(FUND_REQUEST)
