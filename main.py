"""
Strong Workout Analytics Service
FastAPI application for analysing Strong app workout exports

Run with: uvicorn main:app --reload --port 8000
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# Import routers
from routers import imports_router, predictions_router, analysis_router, recommendations_router

# Create FastAPI app
app = FastAPI(
    title="Strong Workout Analytics",
    description="""
    ## Workout Log Analysis

    Upload a Strong app CSV export and explore your training:

    ### Imports
    - **CSV Import**: Parse and merge exports, skipping workouts already imported

    ### Analysis
    - **Personal Records**: e1RM, weight, reps, volume and rep maxes per exercise
    - **Recovery**: Fatigue and recovery per muscle group
    - **Streaks & Stats**: Training streaks, totals and activity heat map

    ### Predictions
    - **Gains Projection**: Week-by-week e1RM projection with diminishing returns
    - **Next Workout Date**: Based on your recent training cadence
    - **1RM Calculator**: Estimated 1RM using six formulas

    ### Recommendations
    - **Next Workout**: Suggestions from recovery, habits and PR opportunities

    ---

    **Tech Stack**: Python, FastAPI, pandas, numpy
    """,
    version="1.0.0",
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc"  # ReDoc alternative
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Check if the analytics service is running"""
    return {
        "status": "healthy",
        "service": "strong-workout-analytics",
        "version": "1.0.0"
    }


# Include routers
app.include_router(imports_router)
app.include_router(predictions_router)
app.include_router(analysis_router)
app.include_router(recommendations_router)


# Root endpoint with service info
@app.get("/", tags=["Info"])
async def root():
    """Service information and available endpoints"""
    return {
        "service": "Strong Workout Analytics",
        "version": "1.0.0",
        "documentation": "/docs",
        "endpoints": {
            "imports": {
                "csv": "POST /imports/csv",
                "workouts": "GET /workouts",
                "clear": "DELETE /workouts"
            },
            "analysis": {
                "records": "GET /analysis/records",
                "exercise_records": "GET /analysis/records/{exercise_name}",
                "fatigue": "GET /analysis/fatigue",
                "streak": "GET /analysis/streak",
                "stats": "GET /analysis/stats",
                "frequency": "GET /analysis/frequency",
                "trends": "GET /analysis/trends/{exercise_name}"
            },
            "predictions": {
                "gains": "GET /predictions/gains",
                "next_workout": "GET /predictions/next-workout",
                "1rm_calculator": "GET /predictions/1rm/calculate"
            },
            "recommendations": {
                "next_workout": "GET /recommendations/next-workout",
                "summary": "GET /recommendations/summary"
            }
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT, reload=True)
