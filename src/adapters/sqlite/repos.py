import json
import sqlite3
from datetime import date, datetime
from decimal import Decimal
from ipaddress import IPv4Address, IPv6Address
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import (
    AgencyPaymentMethod,
    AgentRole,
    ConfigurationDataType,
    ConfigurationScope,
    Distributor,
    DistributorAgency,
    DistributorAgent,
    DistributorAgentAgency,
    DistributorAuditLog,
    DistributorAuthorizedTerritory,
    DistributorBranding,
    DistributorConfiguration,
    DistributorContract,
    DistributorOperation,
    DistributorProductCatalog,
    DistributorSimulation,
    DistributorTermsAndConditions,
    LendingConfiguration,
    LendingContract,
    LendingType,
    Product,
    ProductCategory,
    Shipment,
    TermsAndConditionsTemplate,
)

E = TypeVar("E", bound=BaseModel)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def to_db(value: Any) -> Any:
    """Convert a model value to its SQLite column representation."""
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (UUID, IPv4Address, IPv6Address, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


class SQLiteEntityRepo(Generic[E]):
    """
    Maps one pydantic entity onto one table whose columns are the model fields.

    Subclasses set `table` and `model`; `json_fields` lists columns holding
    serialized JSON documents.
    """

    table: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    json_fields: ClassVar[frozenset[str]] = frozenset()
    default_order: ClassVar[str] = "created_at"

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    @property
    def columns(self) -> list[str]:
        return list(self.model.model_fields)

    def _check_column(self, name: str) -> str:
        if name not in self.model.model_fields:
            raise ValueError(f"Unknown column for {self.table}: {name}")
        return name

    def _from_row(self, row: dict[str, Any]) -> E:
        data = dict(row)
        for name in self.json_fields:
            if data.get(name) is not None:
                data[name] = json.loads(data[name])
        return self.model.model_validate(data)  # type: ignore[return-value]

    def _where(self, criteria: dict[str, Any]) -> tuple[str, list[Any]]:
        clauses = []
        params: list[Any] = []
        for name, value in criteria.items():
            column = self._check_column(name)
            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = ?")
                params.append(to_db(value))
        sql = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        return sql, params

    def save(self, entity: E) -> E:
        columns = self.columns
        placeholders = ", ".join("?" for _ in columns)
        updates = ", ".join(f"{c}=excluded.{c}" for c in columns if c != "id")
        values = [to_db(getattr(entity, c)) for c in columns]

        conn = self._get_conn()
        try:
            conn.execute(
                f"INSERT INTO {self.table} ({', '.join(columns)}) VALUES ({placeholders}) "
                f"ON CONFLICT(id) DO UPDATE SET {updates}",
                values,
            )
            conn.commit()
            return entity
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_id(self, entity_id: UUID) -> E | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                f"SELECT * FROM {self.table} WHERE id = ?", (str(entity_id),)
            ).fetchone()
            return self._from_row(row) if row else None
        finally:
            conn.close()

    def delete(self, entity_id: UUID) -> None:
        conn = self._get_conn()
        try:
            conn.execute(f"DELETE FROM {self.table} WHERE id = ?", (str(entity_id),))
            conn.commit()
        finally:
            conn.close()

    def find_by(self, **criteria: Any) -> list[E]:
        where, params = self._where(criteria)
        conn = self._get_conn()
        try:
            rows = conn.execute(
                f"SELECT * FROM {self.table}{where} ORDER BY {self.default_order} ASC", params
            ).fetchall()
            return [self._from_row(r) for r in rows]
        finally:
            conn.close()

    def exists_by(self, **criteria: Any) -> bool:
        where, params = self._where(criteria)
        conn = self._get_conn()
        try:
            row = conn.execute(
                f"SELECT 1 AS hit FROM {self.table}{where} LIMIT 1", params
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def filter(
        self,
        criteria: dict[str, Any],
        *,
        limit: int,
        offset: int,
        sort_by: str,
        descending: bool,
    ) -> tuple[list[E], int]:
        where, params = self._where(criteria)
        order = f"{self._check_column(sort_by)} {'DESC' if descending else 'ASC'}"
        conn = self._get_conn()
        try:
            total = conn.execute(
                f"SELECT COUNT(*) AS n FROM {self.table}{where}", params
            ).fetchone()["n"]
            rows = conn.execute(
                f"SELECT * FROM {self.table}{where} ORDER BY {order}, id ASC LIMIT ? OFFSET ?",
                [*params, limit, offset],
            ).fetchall()
            return [self._from_row(r) for r in rows], total
        finally:
            conn.close()


# --- Distributors ---


class SQLiteDistributorRepo(SQLiteEntityRepo[Distributor]):
    table = "distributors"
    model = Distributor


class SQLiteBrandingRepo(SQLiteEntityRepo[DistributorBranding]):
    table = "distributor_brandings"
    model = DistributorBranding


class SQLiteAuditLogRepo(SQLiteEntityRepo[DistributorAuditLog]):
    table = "distributor_audit_logs"
    model = DistributorAuditLog
    json_fields = frozenset({"metadata"})
    default_order = "timestamp"


# --- Agencies & agents ---


class SQLiteAgencyRepo(SQLiteEntityRepo[DistributorAgency]):
    table = "distributor_agencies"
    model = DistributorAgency


class SQLiteAgentRepo(SQLiteEntityRepo[DistributorAgent]):
    table = "distributor_agents"
    model = DistributorAgent


class SQLiteAgentRoleRepo(SQLiteEntityRepo[AgentRole]):
    table = "agent_roles"
    model = AgentRole


class SQLiteAgentAgencyRepo(SQLiteEntityRepo[DistributorAgentAgency]):
    table = "distributor_agent_agencies"
    model = DistributorAgentAgency


class SQLitePaymentMethodRepo(SQLiteEntityRepo[AgencyPaymentMethod]):
    table = "agency_payment_methods"
    model = AgencyPaymentMethod


# --- Territories & operations ---


class SQLiteTerritoryRepo(SQLiteEntityRepo[DistributorAuthorizedTerritory]):
    table = "distributor_authorized_territories"
    model = DistributorAuthorizedTerritory


class SQLiteOperationRepo(SQLiteEntityRepo[DistributorOperation]):
    table = "distributor_operations"
    model = DistributorOperation


# --- Catalog ---


class SQLiteProductCategoryRepo(SQLiteEntityRepo[ProductCategory]):
    table = "product_categories"
    model = ProductCategory


class SQLiteProductRepo(SQLiteEntityRepo[Product]):
    table = "products"
    model = Product
    json_fields = frozenset({"specifications"})


class SQLiteProductCatalogRepo(SQLiteEntityRepo[DistributorProductCatalog]):
    table = "distributor_product_catalog"
    model = DistributorProductCatalog


# --- Lending ---


class SQLiteLendingTypeRepo(SQLiteEntityRepo[LendingType]):
    table = "lending_types"
    model = LendingType


class SQLiteLendingConfigurationRepo(SQLiteEntityRepo[LendingConfiguration]):
    table = "lending_configurations"
    model = LendingConfiguration

    def find_active_by_distributor(self, distributor_id: UUID) -> list[LendingConfiguration]:
        """Active configurations attached to the distributor's products."""
        conn = self._get_conn()
        try:
            rows = conn.execute(
                """
                SELECT lc.* FROM lending_configurations lc
                JOIN products p ON p.id = lc.product_id
                WHERE p.distributor_id = ? AND lc.is_active = 1
                ORDER BY lc.created_at ASC
                """,
                (str(distributor_id),),
            ).fetchall()
            return [self._from_row(r) for r in rows]
        finally:
            conn.close()


class SQLiteLendingContractRepo(SQLiteEntityRepo[LendingContract]):
    table = "lending_contracts"
    model = LendingContract


class SQLiteShipmentRepo(SQLiteEntityRepo[Shipment]):
    table = "shipments"
    model = Shipment


# --- Contracts & simulations ---


class SQLiteDistributorContractRepo(SQLiteEntityRepo[DistributorContract]):
    table = "distributor_contracts"
    model = DistributorContract


class SQLiteSimulationRepo(SQLiteEntityRepo[DistributorSimulation]):
    table = "distributor_simulations"
    model = DistributorSimulation


# --- Configuration ---


class SQLiteConfigurationScopeRepo(SQLiteEntityRepo[ConfigurationScope]):
    table = "configuration_scopes"
    model = ConfigurationScope


class SQLiteConfigurationDataTypeRepo(SQLiteEntityRepo[ConfigurationDataType]):
    table = "configuration_data_types"
    model = ConfigurationDataType


class SQLiteDistributorConfigurationRepo(SQLiteEntityRepo[DistributorConfiguration]):
    table = "distributor_configurations"
    model = DistributorConfiguration


# --- Terms & conditions ---


class SQLiteTermsTemplateRepo(SQLiteEntityRepo[TermsAndConditionsTemplate]):
    table = "terms_and_conditions_templates"
    model = TermsAndConditionsTemplate


class SQLiteDistributorTermsRepo(SQLiteEntityRepo[DistributorTermsAndConditions]):
    table = "distributor_terms_and_conditions"
    model = DistributorTermsAndConditions

    def find_expiring_before(
        self, before: datetime, distributor_id: UUID | None = None
    ) -> list[DistributorTermsAndConditions]:
        """Active documents with an expiration date earlier than `before`."""
        sql = (
            "SELECT * FROM distributor_terms_and_conditions "
            "WHERE is_active = 1 AND expiration_date IS NOT NULL AND expiration_date < ?"
        )
        params: list[Any] = [before.isoformat()]
        if distributor_id is not None:
            sql += " AND distributor_id = ?"
            params.append(str(distributor_id))
        sql += " ORDER BY expiration_date ASC"

        conn = self._get_conn()
        try:
            rows = conn.execute(sql, params).fetchall()
            return [self._from_row(r) for r in rows]
        finally:
            conn.close()
