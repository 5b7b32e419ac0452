# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.crop import router as crop_router

app = FastAPI(
    title="Landmark Crop – Azure Vision",
    version="0.1.0",
)

# CORS (relaxed; tighten if needed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root_index():
    return {"message": "Landmark crop endpoint is running", "endpoint": "/crop"}


@app.get("/health")
def health():
    return {"status": "ok"}


# POST /crop: fetch, Azure Read OCR, landmark crop
app.include_router(crop_router)
