"""命令行入口：``python -m app`` 以 uvicorn 启动服务。"""

import uvicorn

from app.packages import get_active_package


def main() -> None:
    settings = get_active_package().get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
