from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
import logging

from dropletgen.config import API_HOST, API_PORT, DEFAULT_STEPS, LOG_LEVEL

# Configure Logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("dropletgen")

app = FastAPI(
    title="Droplet Design Engine",
    version="1.0.0",
    description="Experiment design generation for microfluidic droplet runs"
)

# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], # Allow any local port
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from dropletgen.core.errors import DropletGenerationError


@app.exception_handler(DropletGenerationError)
async def generation_error_handler(request: Request, exc: DropletGenerationError):
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"status": "error", "code": exc.code, "message": exc.detail},
    )


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "droplet-design-engine"}


from dropletgen.params.catalog import catalog_from_nodes, excluded_node_ids
from dropletgen.design.normalize import balancing_candidates, max_ratio_sum, policy_from_name


def _catalog_request(data: dict, skip_end_thermostats: bool):
    """Pull nodes/carrier pumps out of a request and build the catalog."""
    nodes = data.get("nodes", [])
    carriers = data.get("carrierPumps", [])
    skip_end = data.get("skipEndThermostats", skip_end_thermostats)
    catalog = catalog_from_nodes(nodes, carriers, skip_end)
    excluded = excluded_node_ids(nodes, carriers, skip_end)
    return catalog, excluded


def _key(entry: dict):
    return (str(entry.get("nodeId")), entry.get("name"))


@app.post("/catalog")
async def catalog(data: dict):
    """
    Lists the selectable parameters of a flow graph.
    Body: { nodes, carrierPumps, skipEndThermostats }
    """
    specs, _ = _catalog_request(data, skip_end_thermostats=False)
    return {
        "parameters": [s.to_dict() for s in specs],
        "ratioMaxSum": max_ratio_sum(specs),
        "balancingCandidates": balancing_candidates(specs),
    }


from dropletgen.design.generate import (
    generate_factorial_droplets,
    generate_interpolated_droplets,
    require_droplets,
)


@app.post("/generate/factorial")
async def generate_factorial(data: dict):
    """
    Generates response-surface droplets.
    Body: { nodes, carrierPumps, selected: [{nodeId, name, min?, max?}],
            policy: "distribute"|"single", balancingPumpId }
    """
    specs, excluded = _catalog_request(data, skip_end_thermostats=True)
    selected = data.get("selected", [])
    ranges = {
        _key(entry): (entry["min"], entry["max"])
        for entry in selected
        if entry.get("min") is not None and entry.get("max") is not None
    }
    droplets = generate_factorial_droplets(
        specs,
        [_key(entry) for entry in selected],
        policy=policy_from_name(data.get("policy"), data.get("balancingPumpId")),
        excluded_node_ids=excluded,
        ranges=ranges,
    )
    return {"count": len(droplets), "droplets": [d.to_dict() for d in droplets]}


@app.post("/generate/interpolation")
async def generate_interpolation(data: dict):
    """
    Generates droplets sweeping one parameter.
    Body: { nodes, carrierPumps, selected: {nodeId, name}, min, max, steps,
            policy: "distribute"|"single", balancingPumpId }
    """
    specs, excluded = _catalog_request(data, skip_end_thermostats=False)
    droplets = generate_interpolated_droplets(
        specs,
        _key(data.get("selected") or {}),
        low=data.get("min"),
        high=data.get("max"),
        steps=data.get("steps", DEFAULT_STEPS),
        policy=policy_from_name(data.get("policy"), data.get("balancingPumpId")),
        excluded_node_ids=excluded,
    )
    return {"count": len(droplets), "droplets": [d.to_dict() for d in droplets]}


from dropletgen.export.exporter import (
    EXPORT_FILENAME,
    droplets_from_dicts,
    droplets_from_json,
    droplets_to_json,
)


@app.post("/droplets/export")
async def export_droplets(data: dict):
    """
    Returns the droplet list as a downloadable JSON document.
    """
    droplets = droplets_from_dicts(data.get("droplets", []))
    return Response(
        content=droplets_to_json(droplets),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"}
    )


@app.post("/droplets/import")
async def import_droplets(request: Request):
    """Parses an uploaded droplets.json body."""
    body = await request.body()
    droplets = droplets_from_json(body)
    return {"count": len(droplets), "droplets": [d.to_dict() for d in droplets]}


@app.post("/proceed")
async def proceed(data: dict):
    """Hands a generated batch to the next step; refuses an empty batch."""
    droplets = require_droplets(droplets_from_dicts(data.get("droplets", [])))
    return {"status": "ok", "count": len(droplets), "droplets": [d.to_dict() for d in droplets]}


if __name__ == "__main__":
    uvicorn.run("dropletgen.main:app", host=API_HOST, port=API_PORT, reload=True)
