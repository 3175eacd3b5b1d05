from typing import Dict


async def get_health_status() -> Dict[str, str]:
    """
    Liveness probe for the webhook server.
    """
    return {"status": "ok"}
