from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from goal_tracker.config import settings
from goal_tracker.database import engine, Base
from goal_tracker.models.user import User  # noqa: F401 (registers table)
from goal_tracker.models.goal import Goal, GoalLog  # noqa: F401
from goal_tracker.routers import users, goal, logs, dashboard
import logging
from sqlalchemy import exc as sa_exc

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Floor & Ceiling Goal Tracker", version="1.0")

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Include Routers
app.include_router(users.router)
app.include_router(goal.router)
app.include_router(logs.router)
app.include_router(dashboard.router)

# Create DB Tables (local use; Alembic in prod)
@app.on_event("startup")
async def startup_event():
    # ignore duplicate-object errors from previous partial runs
    async with engine.begin() as conn:
        try:
            await conn.run_sync(Base.metadata.create_all)
        except sa_exc.IntegrityError as e:
            msg = str(getattr(e, "orig", e))
            if "duplicate key value violates unique constraint" in msg or "already exists" in msg:
                logging.warning("Ignored duplicate DDL error during create_all: %s", msg)
            else:
                raise

@app.get("/")
def read_root():
    return {"message": "Welcome to the Goal Tracker API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("goal_tracker.main:app", host="0.0.0.0", port=8000, reload=True)
