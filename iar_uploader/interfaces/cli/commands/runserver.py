"""
Run the web uploader with uvicorn
"""

import uvicorn

from iar_uploader.interfaces.cli.commands.base import BaseCommand


class Command(BaseCommand):
    description = "Start the web server"

    def add_arguments(self, parser):
        parser.add_argument("--host", default=None, help="Bind address (default: HOST setting)")
        parser.add_argument("--port", type=int, default=None, help="Bind port (default: PORT setting)")
        parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    def handle(self, **kwargs) -> int:
        settings = self.settings
        host = kwargs.get("host") or settings.host
        port = kwargs.get("port") or settings.port

        self.print_info(f"Serving {settings.project_name} on http://{host}:{port}")
        uvicorn.run(
            "iar_uploader.main:app",
            host=host,
            port=port,
            reload=kwargs.get("reload", False) or settings.debug,
            log_level="debug" if settings.debug else "info",
        )
        return 0
