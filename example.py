#!/usr/bin/env python3
"""
Example usage of the Ignition coder.

This script disassembles a small Ignition config into a directory, edits
one of the extracted files and assembles the config again.
"""

import asyncio
import base64
import json
import tempfile
from pathlib import Path
from src.ignition_coder import IgnitionCoder


def data_url(text: str, media_type: str = "") -> str:
    return f"data:{media_type};base64,{base64.b64encode(text.encode()).decode()}"


async def main():
    """Main example function."""
    print("Ignition Coder Example")
    print("=" * 50)

    config = {
        "ignition": {"version": "3.4.0"},
        "storage": {
            "files": [
                {
                    "path": "/etc/hostname",
                    "mode": 420,
                    "contents": {"source": data_url("node-01\n")}
                },
                {
                    "path": "/etc/motd",
                    "append": [
                        {"source": data_url("Welcome to node-01\n")},
                        {"source": data_url("Managed by Ignition\n")}
                    ]
                }
            ]
        }
    }

    coder = IgnitionCoder(on_progress=lambda count, ref: print(f"  [{count}] extracted {ref}"))

    with tempfile.TemporaryDirectory() as temp_dir:
        decoded_dir = Path(temp_dir) / "decoded"

        print("\n📦 Disassembling...")
        result = await coder.disassemble(json.dumps(config), str(decoded_dir))
        if not result.success:
            print(f"❌ Failed: {result.errors}")
            return

        print(f"✅ Extracted {result.file_count} file(s)")
        for path in sorted(decoded_dir.rglob("*")):
            if path.is_file():
                print(f"  {path.relative_to(decoded_dir)} ({path.stat().st_size} bytes)")

        print("\n✏️  Editing etc/hostname...")
        (decoded_dir / "etc" / "hostname").write_text("node-02\n")

        print("\n🔧 Assembling...")
        assembled = await coder.assemble(str(decoded_dir), compact=True)
        if not assembled.success:
            print(f"❌ Failed: {assembled.errors}")
            return

        print(f"✅ Embedded {assembled.file_count} file(s)")
        print(assembled.json_string)


if __name__ == "__main__":
    asyncio.run(main())
