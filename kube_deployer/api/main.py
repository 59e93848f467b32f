from fastapi import FastAPI
from kube_deployer.api.routes.apps import router as apps_router

app = FastAPI(title="Kubernetes App Deployer API")

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(apps_router)
