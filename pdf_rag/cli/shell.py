"""
Interactive question shell.

Blocking read loop: each line is classified as a command (exit, help, clear,
status) or a question for the answer pipeline. One question is in flight at
a time.

Dependencies: pdf_rag.core.rag_query
System role: Line-based user interface for the chat CLI
"""

import logging
import time
from collections.abc import Callable
from enum import Enum

from pdf_rag.core.rag_query import CorpusState, RAGSearch

logger = logging.getLogger(__name__)

RULE = "=" * 60
ANSWER_RULE = "=" * 80
PROMPT = "\nMake a question: "


class CommandKind(str, Enum):
    """Classification of one input line."""

    EXIT = "exit"
    HELP = "help"
    CLEAR = "clear"
    STATUS = "status"
    EMPTY = "empty"
    QUESTION = "question"


COMMAND_SYNONYMS: dict[CommandKind, frozenset[str]] = {
    CommandKind.EXIT: frozenset({"exit", "quit", "sair", "q"}),
    CommandKind.HELP: frozenset({"help", "ajuda", "h", "?"}),
    CommandKind.CLEAR: frozenset({"clear", "limpar", "cls"}),
    CommandKind.STATUS: frozenset({"status", "info", "s"}),
}


def classify_command(raw: str) -> CommandKind:
    """
    Classify a raw input line (trimmed, case-insensitive).

    Args:
        raw: Line as typed by the user

    Returns:
        CommandKind: Command, EMPTY, or QUESTION
    """
    command = raw.strip().lower()
    if not command:
        return CommandKind.EMPTY
    for kind, synonyms in COMMAND_SYNONYMS.items():
        if command in synonyms:
            return kind
    return CommandKind.QUESTION


def print_banner() -> None:
    print(RULE)
    print("RAG CHAT - PDF Question and Answer System")
    print("Powered by Google Gemini + LangChain + pgvector")
    print(RULE)
    print("Special commands:")
    print("   - 'exit', 'quit', 'q' - Closes the program")
    print("   - 'help' - Shows available commands")
    print("   - 'clear' - Clears the screen")
    print("   - 'status' - Checks system status")
    print(RULE)


def print_help() -> None:
    print("\nAVAILABLE COMMANDS:")
    print("   exit, quit, sair, q   - Closes the program")
    print("   help, ajuda, h, ?     - Shows available commands")
    print("   clear, limpar, cls    - Clears the screen")
    print("   status, info, s       - Checks system status")
    print("   [any text]            - Asks a question about the PDF")
    print("\nTIPS FOR USE:")
    print("   - Ask specific questions about the PDF content")
    print("   - The system responds only based on the document")
    print("   - Out-of-context questions return \"I don't have the information...\"")
    print()


def print_critical_error() -> None:
    """Remediation list shown when the chat cannot start."""
    print("\nCRITICAL ERROR: RAG system could not be initialized!")
    print("\nPOSSIBLE CAUSES AND SOLUTIONS:")
    print("   1. PostgreSQL is not running")
    print("      -> Solution: docker compose up -d")
    print("   2. Ingestion process has not been executed")
    print("      -> Solution: pdf-rag-ingest ./document.pdf")
    print("   3. GOOGLE_API_KEY is not configured or invalid")
    print("      -> Solution: Configure it in the .env file")
    print("   4. Python dependencies are not installed")
    print("      -> Solution: pip install -e .")
    print("   5. pgvector extension has not been created")
    print("      -> Solution: Check the database logs")


def clear_screen() -> None:
    print("\033[2J\033[H", end="", flush=True)


def print_status(rag: RAGSearch | None) -> None:
    """Print the status report, or a troubleshooting checklist without a pipeline."""
    print("\nRAG SYSTEM STATUS:")
    print("=" * 40)

    if rag is None:
        print("System: NOT INITIALIZED")
        print("\nTROUBLESHOOTING CHECKLIST:")
        print("   1. Is PostgreSQL running?")
        print("      -> Command: docker compose up -d")
        print("   2. Has ingestion been executed?")
        print("      -> Command: pdf-rag-ingest ./document.pdf")
        print("   3. Is the API Key configured?")
        print("      -> File: .env (GOOGLE_API_KEY)")
        print("   4. Are dependencies installed?")
        print("      -> Command: pip install -e .")
        return

    status = rag.get_system_status()
    if status.corpus is CorpusState.UNREADY:
        print("RAG System: NOT OPERATIONAL")
        print("Vector store unreachable or query failed. Check PostgreSQL and GOOGLE_API_KEY.")
    else:
        print("RAG System: OPERATIONAL")
        print("PostgreSQL Connection: OK")
        print("pgvector Extension: OK")
        print("Google Gemini API: OK")
        print(f"Vector Database: {'READY' if status.is_ready else 'NOT READY'}")
        if status.corpus is CorpusState.NONEMPTY_UNKNOWN_COUNT:
            print("Available chunks: present (exact count not tracked)")
        else:
            print("Available chunks: none, run ingestion first")

    if status.is_ready:
        print("\nSystem ready to answer questions!")
    print("=" * 40)


class ChatShell:
    """Blocking read-eval-print loop over the answer pipeline."""

    def __init__(
        self,
        rag: RAGSearch | None,
        input_func: Callable[[str], str] | None = None,
    ) -> None:
        """
        Initialize the shell.

        Args:
            rag: Answer pipeline (None shows troubleshooting on status)
            input_func: Line reader, input() by default
        """
        self._rag = rag
        self._input = input_func or input

    def run(self) -> int:
        """
        Run until exit, end of input, or interrupt.

        Returns:
            int: Process exit code (0)
        """
        print("System ready! Type your question or 'help' to see commands.")
        try:
            while True:
                try:
                    line = self._input(PROMPT)
                    if not self.handle(line):
                        break
                except (KeyboardInterrupt, EOFError):
                    raise
                except Exception as e:
                    logger.error(f"Unexpected error in chat loop: {type(e).__name__}: {e}")
                    print("\nUnexpected error during processing:")
                    print(f"   {e}")
                    print("\nYou can:")
                    print("   - Try again with another question")
                    print("   - Type 'status' to check the system")
                    print("   - Type 'exit' to quit")
        except (KeyboardInterrupt, EOFError):
            print("\n\nInterruption detected")
            print("Cleaning up resources...")
            print("Chat closed by user. See you next time!")
        finally:
            self.close()
        return 0

    def handle(self, line: str) -> bool:
        """
        Process one input line.

        Returns:
            bool: False when the shell should stop
        """
        kind = classify_command(line)

        if kind is CommandKind.EXIT:
            print("\nThank you for using RAG Chat. Goodbye!\n")
            print("System shutting down...")
            return False
        if kind is CommandKind.HELP:
            print_help()
        elif kind is CommandKind.CLEAR:
            clear_screen()
            print_banner()
        elif kind is CommandKind.STATUS:
            print_status(self._rag)
        elif kind is CommandKind.EMPTY:
            print("Empty input. Type a question or 'help' to see commands.")
        else:
            self._ask(line.strip())
        return True

    def _ask(self, question: str) -> None:
        if self._rag is None:
            print_status(None)
            return

        print("\nProcessing your question...")
        print("Searching PDF knowledge...")

        start = time.perf_counter()
        answer = self._rag.generate_answer(question)
        elapsed = time.perf_counter() - start

        print("\n" + ANSWER_RULE)
        print(f"ASK: {question}")
        print(ANSWER_RULE)
        print("RESPONSE:")
        print(answer)
        print(ANSWER_RULE)
        print(f"Response time: {elapsed:.2f}s")

    def close(self) -> None:
        if self._rag is not None:
            self._rag.close()
