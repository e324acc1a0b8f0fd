"""
Inventory Insights MCP Server

Provides tools for strategic inventory insights, stock health, transfer
opportunities and 30-day sales forecasts. Reads the (products, sales)
snapshot from a local JSON directory or from S3, depending on environment.
"""

import json
import logging
import os
from dataclasses import replace
from typing import Dict, List, Optional

from dotenv import load_dotenv
from mcp.server import Server
from mcp.types import TextContent, Tool

from data_layer.providers import SnapshotProvider, provider_from_env
from data_layer.records import SnapshotError
from stock_insight import (
    InsightGenerator,
    SalesForecaster,
    StockHealthAnalyzer,
    TransferOptimizer,
    load_config,
)
from stock_insight.analyzers.metrics import (
    calculate_demand_velocity,
    calculate_inventory_cover,
    is_unbounded_cover,
    sales_at_location,
)
from stock_insight.locations import StaticLocationRegistry

load_dotenv(override=False)

logger = logging.getLogger(__name__)

app = Server("inventory-insights")

_provider: Optional[SnapshotProvider] = None


def get_provider() -> SnapshotProvider:
    global _provider
    if _provider is None:
        _provider = provider_from_env()
    return _provider


def set_provider(provider: Optional[SnapshotProvider]) -> None:
    global _provider
    _provider = provider


def _result(data):
    return [TextContent(type="text", text=json.dumps(data, indent=2, ensure_ascii=False, default=str))]


def _analyzer_kwargs() -> Dict:
    kwargs = {"config": load_config()}
    locations = os.environ.get("STOCK_INSIGHT_LOCATIONS")
    if locations:
        kwargs["location_registry"] = StaticLocationRegistry(
            [loc.strip() for loc in locations.split(",") if loc.strip()]
        )
    return kwargs


@app.list_tools()
async def list_tools() -> List[Tool]:
    return [
        Tool(name="get_strategic_insights", description="Top-ranked transfer, liquidation and reorder recommendations",
             inputSchema={"type": "object", "properties": {
                 "limit": {"type": "integer", "minimum": 0, "description": "Optional: override the maximum number of insights"}
             }}),
        Tool(name="get_product_forecasts", description="30-day sales forecast and growth trend per product, sorted by forecast volume",
             inputSchema={"type": "object", "properties": {
                 "product_id": {"type": "string", "description": "Optional: single product"},
                 "include_history": {"type": "boolean", "default": True}
             }}),
        Tool(name="get_stock_health", description="Stock health status, cover days and aging score per product",
             inputSchema={"type": "object", "properties": {
                 "status": {"type": "string", "description": "Optional: Overstock, Stockout Risk, Healthy or Dead Stock"}
             }}),
        Tool(name="find_transfer_opportunities", description="Profitable inter-location stock transfers",
             inputSchema={"type": "object", "properties": {
                 "product_id": {"type": "string", "description": "Optional: single product"}
             }}),
        Tool(name="get_demand_metrics", description="Per-location stock, demand velocity and inventory cover for a product",
             inputSchema={"type": "object", "properties": {
                 "product_id": {"type": "string"},
                 "days": {"type": "integer", "default": 30, "minimum": 1}
             }, "required": ["product_id"]}),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> List[TextContent]:
    handlers = {
        "get_strategic_insights": lambda a: get_strategic_insights(a.get("limit")),
        "get_product_forecasts": lambda a: get_product_forecasts(a.get("product_id"), a.get("include_history", True)),
        "get_stock_health": lambda a: get_stock_health(a.get("status")),
        "find_transfer_opportunities": lambda a: find_transfer_opportunities(a.get("product_id")),
        "get_demand_metrics": lambda a: get_demand_metrics(a["product_id"], a.get("days", 30)),
    }
    handler = handlers.get(name)
    if not handler:
        raise ValueError(f"Unknown tool: {name}")
    return _result(handler(arguments or {}))


# --- Implementation ---

def get_strategic_insights(limit: Optional[int] = None) -> Dict:
    if limit is not None and int(limit) < 0:
        return {"success": False, "error": "limit must not be negative", "data": []}

    try:
        products, sales = get_provider().load()
    except SnapshotError as e:
        logger.error("Snapshot could not be loaded: %s", e)
        return {"success": False, "error": str(e), "data": []}

    kwargs = _analyzer_kwargs()
    if limit is not None:
        kwargs["config"] = replace(kwargs["config"], max_insights=int(limit))

    insights = InsightGenerator(**kwargs).generate(products, sales)
    return {"success": True, "count": len(insights), "data": [i.to_dict() for i in insights]}


def get_product_forecasts(product_id: Optional[str] = None, include_history: bool = True) -> Dict:
    try:
        products, sales = get_provider().load()
    except SnapshotError as e:
        logger.error("Snapshot could not be loaded: %s", e)
        return {"success": False, "error": str(e), "data": []}

    if product_id:
        products = [p for p in products if p.product_id == product_id]
        if not products:
            return {"success": False, "error": f"Product not found: {product_id}", "data": []}

    kwargs = _analyzer_kwargs()
    kwargs.pop("location_registry", None)
    forecasts = SalesForecaster(**kwargs).generate(products, sales)

    data = []
    for f in forecasts:
        item = f.to_dict()
        if not include_history:
            item.pop("history")
        data.append(item)
    return {"success": True, "count": len(data), "data": data}


def get_stock_health(status: Optional[str] = None) -> Dict:
    try:
        products, sales = get_provider().load()
    except SnapshotError as e:
        logger.error("Snapshot could not be loaded: %s", e)
        return {"success": False, "error": str(e), "data": []}

    results = StockHealthAnalyzer(**_analyzer_kwargs()).process(products, sales)
    if status:
        results = [r for r in results if r.status.value == status]
    return {"success": True, "count": len(results), "data": [r.to_dict() for r in results]}


def find_transfer_opportunities(product_id: Optional[str] = None) -> Dict:
    try:
        products, sales = get_provider().load()
    except SnapshotError as e:
        logger.error("Snapshot could not be loaded: %s", e)
        return {"success": False, "error": str(e), "data": []}

    if product_id:
        products = [p for p in products if p.product_id == product_id]

    insights = TransferOptimizer(**_analyzer_kwargs()).find_transfer_opportunities(products, sales)
    return {"success": True, "count": len(insights), "data": [i.to_dict() for i in insights]}


def get_demand_metrics(product_id: str, days: int = 30) -> Dict:
    try:
        products, sales = get_provider().load()
    except SnapshotError as e:
        logger.error("Snapshot could not be loaded: %s", e)
        return {"success": False, "error": str(e), "data": None}

    product = next((p for p in products if p.product_id == product_id), None)
    if product is None:
        return {"success": False, "error": f"Product not found: {product_id}", "data": None}
    if days <= 0:
        return {"success": False, "error": "days must be positive", "data": None}

    optimizer = TransferOptimizer(**_analyzer_kwargs())
    now = optimizer.clock.now()
    overall_velocity = calculate_demand_velocity(product_id, sales, days, now=now)
    overall_cover = calculate_inventory_cover(
        product.total_stock, overall_velocity, optimizer.config.unbounded_cover_days
    )

    locations = []
    for loc_id in optimizer.location_registry.location_ids():
        local_sales = sales_at_location(sales, loc_id)
        velocity = calculate_demand_velocity(product_id, local_sales, days, now=now)
        locations.append({
            "location_id": loc_id,
            "stock": product.stock_at(loc_id),
            "velocity": round(velocity, 4),
            "cover_days": round(calculate_inventory_cover(
                product.stock_at(loc_id), velocity, optimizer.config.unbounded_cover_days), 2),
            "unbounded_cover": is_unbounded_cover(product.stock_at(loc_id), velocity),
        })

    return {"success": True, "data": {
        "product_id": product_id, "name": product.name, "days": days,
        "total_stock": product.total_stock, "velocity": round(overall_velocity, 4),
        "cover_days": round(overall_cover, 2),
        "unbounded_cover": is_unbounded_cover(product.total_stock, overall_velocity),
        "locations": locations,
    }}


if __name__ == "__main__":
    import asyncio
    from mcp.server.stdio import stdio_server

    logging.basicConfig(
        level=os.environ.get("STOCK_INSIGHT_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    async def run():
        async with stdio_server() as (read, write):
            await app.run(read, write, app.create_initialization_options())

    asyncio.run(run())
