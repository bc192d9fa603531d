import argparse
import json
import sys
import threading
import time

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from config.config import Config
from models.article_response import PipelineStage
from orchestrator.core import ArticleOrchestrator

STAGE_MESSAGES = {
    PipelineStage.VALIDATED: "Searching the web",
    PipelineStage.QUERIED: "Writing the draft",
    PipelineStage.DRAFTED: "Editing the article",
    PipelineStage.RESPONDED: "Done",
}


class ProgressPrinter:
    """
    Console spinner that follows pipeline stage transitions.
    """

    def __init__(self, stream=sys.stderr):
        self.stream = stream
        self.label = "Starting"
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def on_stage(self, stage: PipelineStage) -> None:
        message = STAGE_MESSAGES.get(stage)
        if message:
            self.label = message

    def _spin(self) -> None:
        while not self._stop.is_set():
            for char in '|/-\\':
                if self._stop.is_set():
                    break
                self.stream.write(f'\r\033[93m{self.label} {char}\033[0m' + ' ' * 10)
                self.stream.flush()
                time.sleep(0.1)

        # Clear the spinner line
        self.stream.write('\r' + ' ' * 40 + '\r')
        self.stream.flush()

    def __enter__(self):
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()
        return self

    def __exit__(self, *exc_info):
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
        return False


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Research, draft and edit a news article")
    parser.add_argument("topic", help="Subject of the article")
    parser.add_argument("--json", action="store_true", help="Print the response body as JSON")
    args = parser.parse_args(argv)

    config = Config()
    orchestrator = ArticleOrchestrator(config=config)

    if sys.stderr.isatty():
        with ProgressPrinter() as progress:
            result = orchestrator.generate({"topic": args.topic}, progress_callback=progress.on_stage)
    else:
        result = orchestrator.generate(
            {"topic": args.topic},
            progress_callback=lambda stage: print(f"[{stage.value}]", file=sys.stderr),
        )

    if args.json:
        print(json.dumps(result.to_body(), indent=2))
    elif result.is_success:
        print(result.article)
    else:
        print(f"Error: {result.error.message}", file=sys.stderr)

    return 0 if result.is_success else 1


if __name__ == "__main__":
    sys.exit(main())
