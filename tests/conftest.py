"""Shared test fixtures for the asyncapi-prep test suite."""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from src.asyncapi_prep.cloud_events import build_cloud_event_context
from src.asyncapi_prep.references import NameAllocator

PURCHASE_ORDER_SCHEMA = "sap_s4_beh_purchaseorder_v1_PurchaseOrder_Created_v1"
PURCHASE_ORDER_EVENT = "sap.s4.beh.purchaseorder.v1.PurchaseOrder.Created.v1"
PURCHASE_ORDER_CHANNEL = "ce/sap/s4/beh/purchaseorder/v1/PurchaseOrder/Created/v1"

FIXED_TIMESTAMP = "20250102030405"


def _purchase_order_document() -> dict[str, Any]:
    trait = build_cloud_event_context()
    # Documents exported for convert carry the trait without "data"
    trait["headers"]["required"] = ["id", "specversion", "source", "type"]
    return {
        "asyncapi": "2.0.0",
        "x-sap-catalog-spec-version": "1.0",
        "info": {
            "title": "Purchase Order Events",
            "version": "1.0.0",
            "description": "A purchase order is a document issued by a purchaser to a supplier.",
        },
        "x-sap-api-type": "EVENT",
        "channels": {
            PURCHASE_ORDER_CHANNEL: {
                "subscribe": {
                    "message": {"$ref": f"#/components/messages/{PURCHASE_ORDER_SCHEMA}"}
                }
            }
        },
        "components": {
            "messages": {
                PURCHASE_ORDER_SCHEMA: {
                    "name": PURCHASE_ORDER_EVENT,
                    "summary": "PurchaseOrder Created",
                    "description": "This event is raised when a purchase order instance has been created.",
                    "payload": {"$ref": f"#/components/schemas/{PURCHASE_ORDER_SCHEMA}"},
                }
            },
            "schemas": {
                PURCHASE_ORDER_SCHEMA: {
                    "type": "object",
                    "properties": {"PurchaseOrder": {"type": "string", "maxLength": 10}},
                }
            },
            "messageTraits": {"CloudEventContext": trait},
        },
        "externalDocs": {"url": "https://help.sap.com/"},
    }


def _wrapped_order_document() -> dict[str, Any]:
    """A document as produced by ``convert``: payload below ``data``."""
    return {
        "asyncapi": "2.0.0",
        "info": {"title": "Order Events", "version": "1.0.0"},
        "channels": {
            "orders/created": {
                "subscribe": {"message": {"$ref": "#/components/messages/OrderCreated"}}
            }
        },
        "components": {
            "messages": {
                "OrderCreated": {
                    "summary": "Order created",
                    "payload": {"$ref": "#/components/schemas/Order_Created"},
                }
            },
            "schemas": {
                "Order_Created": {
                    "type": "object",
                    "properties": {
                        "type": {"type": "string", "const": "com.example.order.created.v1"},
                        "id": {"type": "string", "minLength": 1},
                        "data": {
                            "type": "object",
                            "properties": {
                                "orderId": {"type": "string"},
                                "quantity": {"type": "integer"},
                                "total": {"type": "number"},
                                "customer": {
                                    "type": "object",
                                    "properties": {
                                        "name": {"type": "string"},
                                        "address": {
                                            "type": "object",
                                            "properties": {"zip": {"type": "string"}},
                                        },
                                    },
                                },
                                "items": {
                                    "type": "array",
                                    "items": {
                                        "type": "object",
                                        "properties": {
                                            "sku": {"type": "string"},
                                            "count": {"type": "integer"},
                                        },
                                    },
                                },
                            },
                            "required": ["orderId"],
                        },
                    },
                    "required": ["id", "specversion", "source", "type", "data"],
                }
            },
        },
    }


@pytest.fixture
def purchase_order_document() -> dict[str, Any]:
    """The SAP purchase-order document used for ``convert``."""
    return _purchase_order_document()


@pytest.fixture
def wrapped_order_document() -> dict[str, Any]:
    """A CloudEvents-wrapped order document used for ``for-import``."""
    return _wrapped_order_document()


@pytest.fixture
def fixed_allocator_factory():
    """Build a :class:`NameAllocator` whose clock always returns FIXED_TIMESTAMP."""

    def _factory(schemas: dict[str, Any]) -> NameAllocator:
        return NameAllocator(schemas, clock=lambda: FIXED_TIMESTAMP)

    return _factory


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON document below ``tmp_path`` and return its path."""

    def _write(document: Any, name: str = "spec.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(copy.deepcopy(document)), encoding="utf-8")
        return path

    return _write
