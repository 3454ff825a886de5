from app.app_config import get_app_environ_config
from app.schemas.init import init_beanie_odm
from app.shared.storage.mongo import get_mongo_client


async def init_schema():
    settings = get_app_environ_config()
    mongo_client = get_mongo_client(settings.MONGO_LABEL)
    await init_beanie_odm(mongo_client, settings.MONGO_DATABASE)


if __name__ == "__main__":
    import asyncio

    asyncio.run(init_schema())
