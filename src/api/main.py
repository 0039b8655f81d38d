import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api.deps import get_settings
from src.app_shell.config import validate_ops_rules
from src.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and prepare the database on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules, settings.data_dir)
        logger.info("Rules loaded from %s", settings.rules_path)
        if rules.ops.run_migrations_on_startup:
            SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    except Exception:
        logger.critical("Startup failed", exc_info=True)
        raise

    yield


app = FastAPI(
    title="Distributor Management API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import (  # noqa: E402
    agencies,
    catalog,
    configurations,
    contracts,
    distributors,
    lending,
    payment_methods,
    shipments,
    simulations,
    terms,
    territories,
)

API = "/api/v1"
DISTRIBUTOR = f"{API}/distributors/{{distributor_id}}"

app.include_router(distributors.router, prefix=f"{API}/distributors", tags=["Distributors"])
app.include_router(
    distributors.branding_router, prefix=f"{DISTRIBUTOR}/brandings", tags=["Branding"]
)
app.include_router(distributors.audit_router, prefix=f"{DISTRIBUTOR}/audit-logs", tags=["Audit"])

app.include_router(agencies.agency_router, prefix=f"{DISTRIBUTOR}/agencies", tags=["Agencies"])
app.include_router(agencies.agent_router, prefix=f"{DISTRIBUTOR}/agents", tags=["Agents"])
app.include_router(
    agencies.agent_agency_router, prefix=f"{DISTRIBUTOR}/agent-agencies", tags=["Agents"]
)
app.include_router(agencies.agent_role_router, prefix=f"{API}/agent-roles", tags=["Agents"])
app.include_router(
    payment_methods.router,
    prefix=f"{API}/agencies/{{agency_id}}/payment-methods",
    tags=["Payment Methods"],
)

app.include_router(
    territories.territory_router,
    prefix=f"{DISTRIBUTOR}/authorized-territories",
    tags=["Territories"],
)
app.include_router(
    territories.operation_router, prefix=f"{DISTRIBUTOR}/operations", tags=["Operations"]
)

app.include_router(
    catalog.category_router, prefix=f"{API}/product-categories", tags=["Catalog"]
)
app.include_router(catalog.product_router, prefix=f"{DISTRIBUTOR}/products", tags=["Catalog"])
app.include_router(
    catalog.catalog_router, prefix=f"{DISTRIBUTOR}/product-catalog", tags=["Catalog"]
)

app.include_router(lending.type_router, prefix=f"{API}/lending-types", tags=["Lending"])
app.include_router(
    lending.configuration_router, prefix=f"{API}/lending-configurations", tags=["Lending"]
)
app.include_router(
    lending.distributor_configuration_router,
    prefix=f"{DISTRIBUTOR}/lending-configurations",
    tags=["Lending"],
)
app.include_router(lending.contract_router, prefix=f"{API}/lending-contracts", tags=["Lending"])
app.include_router(shipments.router, prefix=f"{API}/shipments", tags=["Shipments"])

app.include_router(contracts.router, prefix=f"{DISTRIBUTOR}/contracts", tags=["Contracts"])
app.include_router(
    simulations.router, prefix=f"{DISTRIBUTOR}/simulations", tags=["Simulations"]
)
app.include_router(simulations.lookup_router, prefix=f"{API}/simulations", tags=["Simulations"])

app.include_router(
    configurations.scope_router, prefix=f"{API}/configuration-scopes", tags=["Configuration"]
)
app.include_router(
    configurations.data_type_router,
    prefix=f"{API}/configuration-data-types",
    tags=["Configuration"],
)
app.include_router(
    configurations.configuration_router,
    prefix=f"{DISTRIBUTOR}/configurations",
    tags=["Configuration"],
)

app.include_router(
    terms.template_router, prefix=f"{API}/terms-and-conditions-templates", tags=["Terms"]
)
app.include_router(
    terms.terms_router, prefix=f"{DISTRIBUTOR}/terms-and-conditions", tags=["Terms"]
)


# CORS (Allow Frontend)
def _cors_origins() -> list[str]:
    rules_path = get_settings().rules_path
    if not rules_path.exists():
        return []
    return load_rules(rules_path).cors.allowed_origins


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "distributor-mgmt"}
