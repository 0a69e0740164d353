"""Example: Summarize meeting recordings using the meeting digest library."""

import asyncio
import os
import sys

from meeting_digest import AnalysisWorkspace, AudioFile, ProcessingStatus, SummarizerConfig


async def main():
    """Summarize the recordings given on the command line."""
    config = SummarizerConfig(model="gemini-2.5-flash", temperature=0.3)
    workspace = AnalysisWorkspace(config, credential=os.environ.get("GEMINI_API_KEY", ""))

    # Read audio files, in the order they should be analyzed
    paths = sys.argv[1:] or ["path/to/your/meeting.m4a"]
    workspace.add_files([AudioFile.from_path(path) for path in paths])

    print(f"Analyzing {len(paths)} file(s)...")
    state = await workspace.analyze()

    if state.status != ProcessingStatus.COMPLETED:
        print(f"\nAnalysis failed: {state.message}")
        return

    print("\n3-line summary:")
    for line in workspace.result.summary_3_lines:
        print(f"  - {line}")
    print(f"\nDetailed summary:\n{workspace.result.detailed_summary}")


if __name__ == "__main__":
    asyncio.run(main())
