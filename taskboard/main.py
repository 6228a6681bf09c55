# taskboard/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import os

# ---------------- ENV ----------------
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))

app = FastAPI(title="Taskboard Kanban Backend")

# ---------------- CORS ----------------
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

frontend_origin = os.getenv("FRONTEND_ORIGIN")
if frontend_origin:
    origins.append(frontend_origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------- DATABASE INIT ----------------
from taskboard.database import Base, engine  # noqa: E402
from taskboard.models import activity_log, board, notification, project, task, user  # noqa: E402,F401


print("🔧 Checking database models...")
Base.metadata.create_all(bind=engine)
print("✅ Database ready.")

# ---------------- ROUTERS ----------------
from taskboard.auth.auth_router import router as auth_router  # noqa: E402
from taskboard.project.project_router import router as project_router  # noqa: E402
from taskboard.board.board_router import router as board_router  # noqa: E402
from taskboard.task.task_router import router as task_router  # noqa: E402
from taskboard.notification.notification_router import router as notification_router  # noqa: E402
from taskboard.activity.activity_router import router as activity_router  # noqa: E402

app.include_router(auth_router, prefix="/auth")
app.include_router(project_router)
app.include_router(board_router)
app.include_router(task_router)
app.include_router(notification_router)
app.include_router(activity_router)


# ---------------- ROOT ----------------
@app.get("/")
def read_root():
    return {"message": "Backend running successfully 🚀"}
