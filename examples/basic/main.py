"""Basic example for fastapi-basic-auth.

Run with: uvicorn main:app --reload

    curl -u admin:secret http://127.0.0.1:8000/
    curl http://127.0.0.1:8000/health
"""
import logging
import secrets

from fastapi import APIRouter, FastAPI, Request

from fastapi_basic_auth import (
    BasicAuthConfig,
    BasicAuthMiddleware,
    basic_auth,
    protected_route,
    skip_paths,
)

logging.basicConfig(level=logging.DEBUG)

USERS = {"admin": "secret", "tree.xie": "password"}


def check(account: str, password: str, request: Request) -> bool:
    expected = USERS.get(account)
    return expected is not None and secrets.compare_digest(expected, password)


def check_auditor(account: str, password: str, request: Request) -> bool:
    return account == "auditor" and secrets.compare_digest(password, "audit")


app = FastAPI(title="Basic Auth Example")
app.add_middleware(
    BasicAuthMiddleware,
    config=BasicAuthConfig(
        validate=check,
        realm="example",
        skipper=skip_paths("/health", "/reports/"),
    ),
)

reports = APIRouter(
    prefix="/reports",
    route_class=protected_route(basic_auth(validate=check_auditor, realm="reports")),
)


@reports.get("/")
async def list_reports(request: Request) -> dict:
    return {"auditor": request.state.basic_auth_account, "reports": []}


@app.get("/")
async def index(request: Request) -> dict:
    return {"account": request.state.basic_auth_account}


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


app.include_router(reports)
