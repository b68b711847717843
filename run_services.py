import os
import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "inventory_service.app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8002)),
        reload=os.getenv("RELOAD", "false").lower() == "true",
    )
