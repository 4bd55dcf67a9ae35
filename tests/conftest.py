"""Pytest configuration and fixtures."""

from decimal import Decimal, InvalidOperation

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from finance_tracker.api.client import TransactionsAPI
from finance_tracker.store import TransactionStore

BASE_URL = "http://testserver/api/transactions"

COFFEE = {"id": 1, "description": "Coffee", "amount": "4.50", "date": "2024-01-01", "type": "expense"}


def _validation_error(body: dict):
    try:
        Decimal(str(body.get("amount", "")))
    except InvalidOperation:
        return "Invalid amount"
    if body.get("type") not in ("income", "expense"):
        return "Invalid type"
    return None


def build_fake_api(seed: list[dict]) -> FastAPI:
    """In-memory Transactions API that records every call it receives."""
    app = FastAPI()
    app.state.transactions = {item["id"]: dict(item) for item in seed}
    app.state.calls = []
    app.state.next_id = max(app.state.transactions, default=0) + 1

    @app.get("/api/transactions")
    async def list_transactions(request: Request):
        app.state.calls.append(("GET", request.url.path, None))
        return list(app.state.transactions.values())

    @app.post("/api/transactions", status_code=201)
    async def create_transaction(request: Request):
        body = await request.json()
        app.state.calls.append(("POST", request.url.path, body))
        error = _validation_error(body)
        if error:
            return JSONResponse(status_code=400, content={"message": error})
        created = {"id": app.state.next_id, **body}
        app.state.transactions[created["id"]] = created
        app.state.next_id += 1
        return created

    @app.put("/api/transactions/{transaction_id}")
    async def update_transaction(transaction_id: int, request: Request):
        body = await request.json()
        app.state.calls.append(("PUT", request.url.path, body))
        if transaction_id not in app.state.transactions:
            return JSONResponse(status_code=404, content={"message": "Transaction not found"})
        error = _validation_error(body)
        if error:
            return JSONResponse(status_code=400, content={"message": error})
        updated = {"id": transaction_id, **body}
        app.state.transactions[transaction_id] = updated
        return updated

    @app.delete("/api/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: int, request: Request):
        app.state.calls.append(("DELETE", request.url.path, None))
        if app.state.transactions.pop(transaction_id, None) is None:
            return JSONResponse(status_code=404, content={"message": "Transaction not found"})
        return Response(status_code=204)

    return app


@pytest.fixture
def fake_server():
    """Fake API seeded with a single expense."""
    return build_fake_api([COFFEE])


@pytest_asyncio.fixture
async def api(fake_server):
    client = TransactionsAPI(BASE_URL, transport=httpx.ASGITransport(app=fake_server))
    yield client
    await client.close()


@pytest.fixture
def store(api):
    return TransactionStore(api)


@pytest_asyncio.fixture
async def make_api():
    """Factory for clients backed by an httpx.MockTransport handler."""
    clients = []

    def _make(handler) -> TransactionsAPI:
        client = TransactionsAPI(BASE_URL, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.close()
