"""FastAPI main application."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Dict
import structlog

from .. import __version__
from ..config import settings
from ..config.city_options import CityOptions
from ..core.city_generator import CityGenerator
from ..errors import CityConfigurationError
from ..logging_config import configure_logging

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Procedural City Generator API",
    description="Generates city layouts from noise fields and a seed",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CitySummary(BaseModel):
    """Seed and counts of a generated city."""

    seed: str
    grid_size: int
    summary: Dict[str, int]
    generation_time_seconds: float


def _generate(options: CityOptions):
    if options.grid_size > settings.max_grid_size:
        raise HTTPException(
            status_code=400,
            detail=f"grid_size exceeds the maximum of {settings.max_grid_size}",
        )
    if "workers" not in options.model_fields_set:
        try:
            options = CityOptions.build(**{**options.model_dump(), "workers": settings.default_workers})
        except CityConfigurationError as e:
            logger.error("Invalid default worker setting", error=str(e))
            raise HTTPException(status_code=500, detail="Invalid server settings") from e

    logger.info("City generation requested", request=options.model_dump())
    try:
        return CityGenerator(options).generate()
    except Exception as e:
        logger.error("City generation failed", error=str(e))
        raise HTTPException(status_code=500, detail="City generation failed") from e


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Procedural City Generator API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/options/defaults", response_model=CityOptions)
async def get_default_options():
    """Default generation options."""
    return CityOptions()


@app.post("/cities/generate")
def generate_city(options: CityOptions):
    """Generate a city and return its full layout."""
    layout = _generate(options)
    return layout.to_dict()


@app.post("/cities/summary", response_model=CitySummary)
def summarize_city(options: CityOptions):
    """Generate a city and return only its seed and counts."""
    layout = _generate(options)
    return CitySummary(
        seed=layout.seed,
        grid_size=layout.options.grid_size,
        summary=layout.summary(),
        generation_time_seconds=layout.generation_time_seconds,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
