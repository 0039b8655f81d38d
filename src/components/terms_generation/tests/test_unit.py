"""
Terms generation component unit tests.

Tests for the template engine and for generating and renewing
distributor documents.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

import pytest

from src.adapters.clock import FixedClock
from src.components.distributor_terms import DistributorTermsService
from src.components.terms_generation import (
    GenerateInput,
    PreviewInput,
    RenewInput,
    TermsGenerationService,
    VariableSchemaError,
    VariableSpec,
    add_months,
    default_variables,
    extract_placeholders,
    is_valid_type,
    needs_renewal,
    parse_variable_schema,
    process_template,
    run_generate,
    run_needs_renewal,
    run_preview,
    run_renew,
    run_renew_due,
    validate_variables,
)
from src.domain.entities import (
    Distributor,
    DistributorTermsAndConditions,
    TermsAndConditionsTemplate,
)
from src.rules.models import TermsRules

NOW = datetime(2025, 1, 31, 15, 45, 0)

# --- Mock Repositories ---


class MockRepo:
    """In-memory repository keyed by entity id."""

    def __init__(self) -> None:
        self.items: dict[UUID, Any] = {}

    def save(self, entity: Any) -> Any:
        self.items[entity.id] = entity
        return entity

    def get_by_id(self, entity_id: UUID) -> Any | None:
        return self.items.get(entity_id)

    def delete(self, entity_id: UUID) -> None:
        self.items.pop(entity_id, None)

    def find_by(self, **criteria: Any) -> list[Any]:
        return [
            item
            for item in self.items.values()
            if all(getattr(item, k) == v for k, v in criteria.items())
        ]

    def exists_by(self, **criteria: Any) -> bool:
        return bool(self.find_by(**criteria))

    def filter(self, criteria: dict[str, Any], **_: Any) -> tuple[list[Any], int]:
        found = self.find_by(**criteria)
        return found, len(found)


class MockTermsRepo(MockRepo):
    def find_expiring_before(
        self, before: datetime, distributor_id: UUID | None = None
    ) -> list[DistributorTermsAndConditions]:
        return [
            d
            for d in self.items.values()
            if d.is_active
            and d.expiration_date is not None
            and d.expiration_date < before
            and (distributor_id is None or d.distributor_id == distributor_id)
        ]


# --- Fixtures ---


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def templates() -> MockRepo:
    return MockRepo()


@pytest.fixture
def distributors() -> MockRepo:
    return MockRepo()


@pytest.fixture
def documents() -> MockTermsRepo:
    return MockTermsRepo()


@pytest.fixture
def service(
    templates: MockRepo, distributors: MockRepo, documents: MockTermsRepo, clock: FixedClock
) -> TermsGenerationService:
    rules = TermsRules(renewal_window_days=30)
    terms = DistributorTermsService(documents, rules, clock=clock)
    return TermsGenerationService(templates, distributors, terms, clock, rules)


@pytest.fixture
def distributor(distributors: MockRepo) -> Distributor:
    return distributors.save(
        Distributor(
            name="Acme Distribution",
            display_name="Acme",
            tax_id="PT123456789",
            support_email="help@acme.example",
            city="Lisbon",
            country_code="PT",
        )
    )


def _template(templates: MockRepo, **overrides: Any) -> TermsAndConditionsTemplate:
    data: dict[str, Any] = {
        "name": "Distribution agreement",
        "category": "GENERAL",
        "template_content": (
            "Agreement between {{distributorName}} and {{clientName}} "
            "for {{monthlyFee}} per month, dated {{currentDate}}."
        ),
        "variables": (
            '{"clientName": {"type": "string", "required": true},'
            ' "monthlyFee": {"type": "number"}}'
        ),
        "version": "2.1",
        "renewal_period_months": 12,
        "auto_renewal": True,
    }
    data.update(overrides)
    return templates.save(TermsAndConditionsTemplate(**data))


# --- Engine ---


class TestProcessTemplate:
    def test_replaces_known_variables(self) -> None:
        result = process_template(
            "Hello {{name}}, {{ greeting }}!", {"name": "Ana", "greeting": "hi"}
        )

        assert result == "Hello Ana, hi!"

    def test_unknown_and_null_variables_left_in_place(self) -> None:
        result = process_template("{{a}} {{b}} {{c}}", {"a": 1, "b": None})

        assert result == "1 {{b}} {{c}}"

    def test_substituted_text_is_not_rescanned(self) -> None:
        result = process_template("{{a}}", {"a": "{{b}}", "b": "boom"})

        assert result == "{{b}}"

    def test_formats_values(self) -> None:
        result = process_template(
            "{{d}} | {{dt}} | {{flag}} | {{amount}}",
            {
                "d": date(2025, 3, 9),
                "dt": datetime(2025, 3, 9, 8, 5, 1),
                "flag": True,
                "amount": Decimal("10.50"),
            },
        )

        assert result == "2025-03-09 | 2025-03-09 08:05:01 | true | 10.50"

    def test_none_content_or_variables(self) -> None:
        assert process_template(None, {"a": 1}) is None
        assert process_template("{{a}}", None) == "{{a}}"

    def test_extract_placeholders(self) -> None:
        assert extract_placeholders("{{b}} {{a}} {{ b }}") == ["b", "a"]
        assert extract_placeholders(None) == []


class TestVariableSchema:
    def test_parse(self) -> None:
        schema = parse_variable_schema(
            '{"fee": {"type": "NUMBER", "required": "true"}, "note": {}}'
        )

        assert schema["fee"] == VariableSpec(name="fee", type="number", required=True)
        assert schema["note"] == VariableSpec(name="note", type="string", required=False)

    def test_empty(self) -> None:
        assert parse_variable_schema(None) == {}
        assert parse_variable_schema("  ") == {}

    @pytest.mark.parametrize("raw", ["not json", "[]", '{"a": 1}'])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(VariableSchemaError):
            parse_variable_schema(raw)

    @pytest.mark.parametrize(
        ("value", "kind", "expected"),
        [
            ("text", "string", True),
            (5, "string", False),
            (5, "number", True),
            (2.5, "number", True),
            (True, "number", False),
            (False, "boolean", True),
            ("true", "boolean", False),
            ("2025-01-31", "date", True),
            ("2025-01-31T10:00:00", "date", True),
            (date(2025, 1, 31), "date", True),
            ("31/01/2025", "date", False),
            ({"x": 1}, "object", True),
            (None, "number", True),
        ],
    )
    def test_is_valid_type(self, value: Any, kind: str, expected: bool) -> None:
        assert is_valid_type(value, kind) is expected

    def test_validate_reports_every_failure(self) -> None:
        schema = parse_variable_schema(
            '{"name": {"type": "string", "required": true},'
            ' "fee": {"type": "number"},'
            ' "start": {"type": "date", "required": true}}'
        )

        errors = validate_variables(schema, {"fee": "ten", "start": None})

        assert [(e.code, e.field) for e in errors] == [
            ("variable_required", "name"),
            ("variable_type_invalid", "fee"),
            ("variable_required", "start"),
        ]


class TestDates:
    def test_add_months_clamps_day(self) -> None:
        assert add_months(datetime(2025, 1, 31, 9, 0), 1) == datetime(2025, 2, 28, 9, 0)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2025, 11, 15), 14) == date(2027, 1, 15)

    def test_needs_renewal(self) -> None:
        expiration = NOW + timedelta(days=20)

        assert needs_renewal(expiration, NOW, 30) is True
        assert needs_renewal(expiration, NOW, 10) is False
        assert needs_renewal(None, NOW, 30) is False

    def test_default_variables(self, distributor: Distributor) -> None:
        variables = default_variables(distributor, NOW)

        assert variables["currentDate"] == "2025-01-31"
        assert variables["currentDateTime"] == "2025-01-31 15:45:00"
        assert variables["distributorName"] == "Acme Distribution"
        assert variables["distributorEmail"] == "help@acme.example"
        assert variables["distributorCountry"] == "PT"

    def test_default_variables_without_distributor(self) -> None:
        assert set(default_variables(None, NOW)) == {"currentDate", "currentDateTime"}


# --- Generation ---


class TestGenerate:
    def test_generate_draft(
        self, service: TermsGenerationService, templates: MockRepo, distributor: Distributor
    ) -> None:
        template = _template(templates)
        actor = uuid4()

        result = run_generate(
            GenerateInput(
                template_id=template.id,
                distributor_id=distributor.id,
                variables={"clientName": "Globex", "monthlyFee": 99},
                actor_id=actor,
            ),
            service,
        )

        assert result.success is True
        document = result.document
        assert document.content == (
            "Agreement between Acme Distribution and Globex for 99 per month, dated 2025-01-31."
        )
        assert document.status == "DRAFT"
        assert document.is_active is True
        assert document.template_id == template.id
        assert document.title == template.name
        assert document.version == "2.1"
        assert document.distributor_id == distributor.id
        assert document.effective_date == NOW
        assert document.expiration_date == datetime(2026, 1, 31, 15, 45, 0)
        assert document.created_by == actor

    def test_without_renewal_period_has_no_expiration(
        self, service: TermsGenerationService, templates: MockRepo, distributor: Distributor
    ) -> None:
        template = _template(templates, renewal_period_months=None)

        document, errors = service.generate_from_template(
            template.id, distributor.id, {"clientName": "Globex"}
        )

        assert errors == []
        assert document.expiration_date is None

    def test_missing_required_variable(
        self, service: TermsGenerationService, templates: MockRepo, distributor: Distributor
    ) -> None:
        template = _template(templates)

        result = run_generate(
            GenerateInput(
                template_id=template.id,
                distributor_id=distributor.id,
                variables={"monthlyFee": "a lot"},
            ),
            service,
        )

        assert result.success is False
        assert {e.code for e in result.errors} == {"variable_required", "variable_type_invalid"}

    def test_defaults_satisfy_required_variables(
        self, service: TermsGenerationService, templates: MockRepo, distributor: Distributor
    ) -> None:
        template = _template(
            templates,
            template_content="{{distributorName}}",
            variables='{"distributorName": {"type": "string", "required": true}}',
        )

        document, errors = service.generate_from_template(template.id, distributor.id, {})

        assert errors == []
        assert document.content == "Acme Distribution"

    def test_caller_overrides_defaults(
        self, service: TermsGenerationService, templates: MockRepo, distributor: Distributor
    ) -> None:
        template = _template(templates, template_content="{{distributorName}}", variables=None)

        document, _ = service.generate_from_template(
            template.id, distributor.id, {"distributorName": "Acme Ltd"}
        )

        assert document.content == "Acme Ltd"

    def test_inactive_template(
        self, service: TermsGenerationService, templates: MockRepo, distributor: Distributor
    ) -> None:
        template = _template(templates, is_active=False)

        document, errors = service.generate_from_template(
            template.id, distributor.id, {"clientName": "Globex"}
        )

        assert document is None
        assert errors[0].code == "template_inactive"

    def test_missing_template_and_distributor(
        self, service: TermsGenerationService, templates: MockRepo
    ) -> None:
        _, errors = service.generate_from_template(uuid4(), uuid4(), {})
        assert errors[0].code == "template_not_found"

        template = _template(templates)
        _, errors = service.generate_from_template(template.id, uuid4(), {"clientName": "X"})
        assert errors[0].code == "distributor_not_found"


class TestPreview:
    def test_preview_uses_supplied_variables_only(
        self, service: TermsGenerationService, templates: MockRepo
    ) -> None:
        template = _template(templates)

        result = run_preview(
            PreviewInput(template_id=template.id, variables={"clientName": "Globex"}), service
        )

        assert result.success is True
        assert result.content == (
            "Agreement between {{distributorName}} and Globex "
            "for {{monthlyFee}} per month, dated {{currentDate}}."
        )
        assert result.unresolved == ["distributorName", "monthlyFee", "currentDate"]

    def test_braces_inside_a_value_are_not_unresolved(
        self, service: TermsGenerationService, templates: MockRepo
    ) -> None:
        template = _template(templates)
        variables = {
            "clientName": "{{nickname}}",
            "distributorName": "Acme",
            "monthlyFee": 10,
            "currentDate": None,
        }

        result = run_preview(PreviewInput(template_id=template.id, variables=variables), service)

        assert "and {{nickname}} for 10" in result.content
        assert result.unresolved == ["currentDate"]

    def test_preview_missing_template(self, service: TermsGenerationService) -> None:
        result = run_preview(PreviewInput(template_id=uuid4()), service)

        assert result.success is False
        assert result.errors[0].code == "template_not_found"


# --- Renewal ---


def _document(
    documents: MockTermsRepo,
    distributor: Distributor,
    template: TermsAndConditionsTemplate | None,
    expires_in: timedelta,
    status: str = "SIGNED",
) -> DistributorTermsAndConditions:
    return documents.save(
        DistributorTermsAndConditions(
            distributor_id=distributor.id,
            template_id=template.id if template else None,
            title="Distribution agreement",
            content="...",
            version="2.0",
            effective_date=NOW - timedelta(days=300),
            expiration_date=NOW + expires_in,
            status=status,
        )
    )


class TestRenewal:
    def test_needs_renewal(
        self,
        service: TermsGenerationService,
        templates: MockRepo,
        documents: MockTermsRepo,
        distributor: Distributor,
    ) -> None:
        template = _template(templates)
        due = _document(documents, distributor, template, timedelta(days=10))
        later = _document(documents, distributor, template, timedelta(days=60))

        due_result = run_needs_renewal(RenewInput(terms_id=due.id), service)
        later_result = run_needs_renewal(RenewInput(terms_id=later.id), service)
        missing = run_needs_renewal(RenewInput(terms_id=uuid4()), service)

        assert due_result.needs_renewal is True
        assert later_result.needs_renewal is False
        assert missing.success is False
        assert missing.errors[0].code == "terms_not_found"

    def test_auto_renew(
        self,
        service: TermsGenerationService,
        templates: MockRepo,
        documents: MockTermsRepo,
        distributor: Distributor,
    ) -> None:
        template = _template(
            templates,
            template_content=(
                "Valid {{effectiveDate}} to {{expirationDate}} for {{distributorName}}"
            ),
            variables=None,
            renewal_period_months=6,
        )
        old = _document(documents, distributor, template, timedelta(days=5))

        result = run_renew(RenewInput(terms_id=old.id, distributor_id=distributor.id), service)

        assert result.success is True
        renewed = result.document
        assert renewed.id != old.id
        assert renewed.status == "DRAFT"
        assert renewed.effective_date == datetime(2025, 1, 31)
        assert renewed.expiration_date == datetime(2025, 7, 31)
        assert renewed.content == "Valid 2025-01-31 to 2025-07-31 for Acme Distribution"
        assert documents.get_by_id(old.id).is_active is False

    def test_auto_renew_requires_template_support(
        self,
        service: TermsGenerationService,
        templates: MockRepo,
        documents: MockTermsRepo,
        distributor: Distributor,
    ) -> None:
        manual = _template(templates, auto_renewal=False)
        without_template = _document(documents, distributor, None, timedelta(days=5))
        not_renewable = _document(documents, distributor, manual, timedelta(days=5))

        first = run_renew(RenewInput(terms_id=without_template.id), service)
        second = run_renew(RenewInput(terms_id=not_renewable.id), service)

        assert first.errors[0].code == "auto_renewal_unsupported"
        assert second.errors[0].code == "auto_renewal_unsupported"
        assert documents.get_by_id(not_renewable.id).is_active is True

    def test_renew_in_other_distributor_is_not_found(
        self,
        service: TermsGenerationService,
        templates: MockRepo,
        documents: MockTermsRepo,
        distributor: Distributor,
    ) -> None:
        old = _document(documents, distributor, _template(templates), timedelta(days=5))

        result = run_renew(RenewInput(terms_id=old.id, distributor_id=uuid4()), service)

        assert result.success is False
        assert result.errors[0].code == "terms_not_found"

    def test_renew_due(
        self,
        service: TermsGenerationService,
        templates: MockRepo,
        documents: MockTermsRepo,
        distributor: Distributor,
    ) -> None:
        renewable = _template(templates, variables=None)
        manual = _template(templates, name="Manual", auto_renewal=False, variables=None)
        due = _document(documents, distributor, renewable, timedelta(days=3))
        skipped = _document(documents, distributor, manual, timedelta(days=3))
        _document(documents, distributor, renewable, timedelta(days=3), status="DRAFT")
        _document(documents, distributor, renewable, timedelta(days=90))

        report = run_renew_due(service)

        assert [d.template_id for d in report.renewed] == [renewable.id]
        assert report.skipped == [skipped.id]
        assert report.failed == {}
        assert documents.get_by_id(due.id).is_active is False
