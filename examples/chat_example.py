"""Example: Ask follow-up questions about an analyzed meeting."""

import asyncio
import os

from meeting_digest import AnalysisWorkspace, AudioFile, ProcessingStatus


async def main():
    """Analyze one recording, then chat about it."""
    workspace = AnalysisWorkspace(credential=os.environ.get("GEMINI_API_KEY", ""))
    workspace.add_files([AudioFile.from_path("path/to/your/meeting.m4a")])

    state = await workspace.analyze()
    if state.status != ProcessingStatus.COMPLETED:
        print(f"Analysis failed: {state.message}")
        return

    questions = [
        "회의에서 결정된 사항은 무엇인가요?",
        "다음 회의까지 해야 할 일을 정리해줘.",
    ]
    for question in questions:
        print(f"\nQ: {question}")
        reply = await workspace.ask(question)
        if reply is not None:
            print(f"A: {reply.text}")


if __name__ == "__main__":
    asyncio.run(main())
