"""Integration tests for the Ignition coder."""

import json
import logging
import pytest
from ignition_coder import IgnitionCoder


class TestIgnitionCoderIntegration:
    """Integration tests for the complete disassemble/assemble cycle."""

    def setup_method(self):
        """Set up test fixtures."""
        self.coder = IgnitionCoder()

    @pytest.mark.asyncio
    async def test_disassemble_sample(self, temp_dir, sample_ignition_json):
        """Test disassembling a config with every kind of content."""
        output_dir = temp_dir / "decoded"

        result = await self.coder.disassemble(sample_ignition_json, str(output_dir))

        assert result.success
        assert result.file_count == 5
        assert result.errors is None
        assert (output_dir / "decoded.ign").exists()
        assert (output_dir / "etc/hostname").read_bytes() == b"node-01\n"
        assert (output_dir / "etc/motd/1").read_bytes() == b"Maintenance window: Sunday\n"
        assert (output_dir / "etc/issue.d/greeting.issue").read_bytes() == b"hello world"
        assert json.loads((output_dir / "content-0.json").read_text()) == {"ignition": {"version": "3.4.0"}}

        decoded = json.loads((output_dir / "decoded.ign").read_text())
        hostname = decoded["storage"]["files"][0]["contents"]["source"]
        assert hostname == "data:text/plain;charset=utf-8;base64-placeholder,etc/hostname"

    @pytest.mark.asyncio
    async def test_round_trip(self, temp_dir, sample_ignition_json, sample_ignition):
        """Test that assemble restores the original config."""
        output_dir = temp_dir / "decoded"
        target_file = temp_dir / "output.ign"

        await self.coder.disassemble(sample_ignition_json, str(output_dir))
        result = await self.coder.assemble(str(output_dir), str(target_file))

        assert result.success
        assert result.file_count == 5
        assert result.output_file == str(target_file)
        assert json.loads(result.json_string) == sample_ignition
        assert json.loads(target_file.read_text()) == sample_ignition

    @pytest.mark.asyncio
    async def test_round_trip_after_editing_content(self, temp_dir, sample_ignition_json):
        """Test the operator workflow of editing an extracted file."""
        output_dir = temp_dir / "decoded"
        await self.coder.disassemble(sample_ignition_json, str(output_dir))
        (output_dir / "etc/hostname").write_text("node-02\n")

        result = await self.coder.assemble(str(output_dir))

        assembled = json.loads(result.json_string)
        assert assembled["storage"]["files"][0]["contents"]["source"] == (
            "data:text/plain;charset=utf-8;base64,bm9kZS0wMgo="
        )
        assert result.output_file is None

    @pytest.mark.asyncio
    async def test_assemble_compact_and_strip_defaults(self, temp_dir, data_url):
        """Test serialization options of assemble."""
        document = {
            "ignition": {"version": "3.4.0"},
            "storage": {
                "files": [{
                    "path": "/etc/test",
                    "overwrite": False,
                    "contents": {"source": data_url("test content")}
                }]
            }
        }
        output_dir = temp_dir / "decoded"
        await self.coder.disassemble(json.dumps(document), str(output_dir))

        result = await self.coder.assemble(str(output_dir), compact=True, strip_defaults=True)

        assert result.json_string == (
            '{"ignition":{"version":"3.4.0"},"storage":{"files":[{"path":"/etc/test",'
            '"contents":{"source":"data:;base64,dGVzdCBjb250ZW50"}}]}}'
        )

    @pytest.mark.asyncio
    async def test_instance_defaults_for_assemble(self, temp_dir, data_url):
        """Test that constructor settings apply when no override is given."""
        coder = IgnitionCoder(compact=True, enable_profiling=False)
        output_dir = temp_dir / "decoded"
        await coder.disassemble('{"ignition": {"version": "3.0.0"}}', str(output_dir))

        result = await coder.assemble(str(output_dir))

        assert result.json_string == '{"ignition":{"version":"3.0.0"}}'

    @pytest.mark.asyncio
    async def test_custom_document_filename(self, temp_dir):
        """Test the configurable name of the decomposed config."""
        coder = IgnitionCoder(document_filename="config.ign")

        result = await coder.disassemble('{"ignition": {"version": "3.4.0"}}', str(temp_dir))

        assert result.document_path == str(temp_dir / "config.ign")

    @pytest.mark.asyncio
    async def test_disassemble_invalid_json(self, temp_dir):
        """Test disassembling invalid JSON."""
        result = await self.coder.disassemble('{"ignition": ', str(temp_dir))

        assert not result.success
        assert result.file_count == 0
        assert "Invalid Ignition document" in result.errors[0]
        assert not (temp_dir / "decoded.ign").exists()

    @pytest.mark.asyncio
    async def test_disassemble_unsupported_version(self, temp_dir):
        """Test disassembling a spec 2 config."""
        result = await self.coder.disassemble('{"ignition": {"version": "2.2.0"}}', str(temp_dir))

        assert not result.success
        assert "2.2.0" in result.errors[0]

    @pytest.mark.asyncio
    async def test_disassemble_into_file_path(self, temp_dir):
        """Test that the output directory cannot be an existing file."""
        file_path = temp_dir / "occupied"
        file_path.write_text("x")

        result = await self.coder.disassemble('{"ignition": {"version": "3.4.0"}}', str(file_path))

        assert not result.success
        assert "not a directory" in result.errors[0]

    @pytest.mark.asyncio
    async def test_disassemble_failure_keeps_written_files(self, temp_dir, data_url):
        """Test that a failure reports files already written and leaves them in place."""
        document = {
            "ignition": {"version": "3.4.0"},
            "storage": {
                "files": [
                    {"path": "/etc/good", "contents": {"source": data_url("good")}},
                    {"path": "/etc/bad", "contents": {"source": "data:;base64,!!!"}}
                ]
            }
        }

        result = await self.coder.disassemble(json.dumps(document), str(temp_dir))

        assert not result.success
        assert result.file_count == 1
        assert "/etc/bad" in result.errors[0]
        assert (temp_dir / "etc/good").exists()
        assert not (temp_dir / "decoded.ign").exists()

    @pytest.mark.asyncio
    async def test_disassemble_path_escape(self, temp_dir, data_url):
        """Test that traversal in a file path fails the operation."""
        document = {
            "ignition": {"version": "3.4.0"},
            "storage": {"files": [{"path": "/../../etc/shadow", "contents": {"source": data_url("x")}}]}
        }
        output_dir = temp_dir / "out"

        result = await self.coder.disassemble(json.dumps(document), str(output_dir))

        assert not result.success
        assert "escapes the content root" in result.errors[0]

    @pytest.mark.asyncio
    async def test_disassemble_content_named_like_document(self, temp_dir):
        """Test that a file declared at the document's name fails the operation."""
        document = {
            "ignition": {"version": "3.4.0"},
            "storage": {"files": [{"path": "/decoded.ign", "contents": {"source": "data:;base64,cGF5bG9hZA=="}}]}
        }

        result = await self.coder.disassemble(json.dumps(document), str(temp_dir))

        assert not result.success
        assert result.file_count == 0
        assert "reserved for the Ignition document" in result.errors[0]
        assert not (temp_dir / "decoded.ign").exists()

    @pytest.mark.asyncio
    async def test_round_trip_with_root_level_ign_content(self, temp_dir, data_url):
        """Test that a content file sorting before the document is not taken for it."""
        document = {
            "ignition": {"version": "3.4.0"},
            "storage": {"files": [{"path": "/a.ign", "contents": {"source": data_url('{"not": "a config"}')}}]}
        }
        output_dir = temp_dir / "decoded"

        await self.coder.disassemble(json.dumps(document), str(output_dir))
        result = await self.coder.assemble(str(output_dir))

        assert (output_dir / "a.ign").exists()
        assert result.success
        assert json.loads(result.json_string) == document

    @pytest.mark.asyncio
    async def test_assemble_falls_back_to_other_document_name(self, temp_dir):
        """Test that a renamed decomposed config is still found."""
        (temp_dir / "renamed.ign").write_text('{"ignition": {"version": "3.4.0"}}')

        result = await self.coder.assemble(str(temp_dir))

        assert result.success
        assert json.loads(result.json_string) == {"ignition": {"version": "3.4.0"}}

    @pytest.mark.asyncio
    async def test_disassemble_reports_warnings(self, temp_dir):
        """Test that schema warnings are surfaced without failing."""
        text = '{"ignition": {"version": "3.4.0"}, "extra": {}}'

        result = await self.coder.disassemble(text, str(temp_dir))

        assert result.success
        assert result.warnings == ["Unknown section 'extra' for spec 3.4.0"]

    @pytest.mark.asyncio
    async def test_warnings_are_logged_below_warning_level(self, temp_dir, caplog):
        """Test that schema warnings are only debug logs, the result carries them to the user."""
        text = '{"ignition": {"version": "3.4.0"}, "extra": {}}'

        with caplog.at_level(logging.DEBUG):
            result = await self.coder.disassemble(text, str(temp_dir))

        records = [r for r in caplog.records if "Unknown section" in r.getMessage()]
        assert result.warnings == ["Unknown section 'extra' for spec 3.4.0"]
        assert [r.levelno for r in records] == [logging.DEBUG]

    @pytest.mark.asyncio
    async def test_disassemble_file_missing(self, temp_dir):
        """Test reading a config that does not exist."""
        result = await self.coder.disassemble_file(temp_dir / "missing.ign", str(temp_dir / "out"))

        assert not result.success
        assert "read Ignition document" in result.errors[0]

    @pytest.mark.asyncio
    async def test_disassemble_file(self, temp_dir, sample_ignition_json):
        """Test disassembling a config read from disk."""
        input_file = temp_dir / "input.ign"
        input_file.write_text(sample_ignition_json)

        result = await self.coder.disassemble_file(input_file, str(temp_dir / "out"))

        assert result.success
        assert result.file_count == 5

    @pytest.mark.asyncio
    async def test_assemble_missing_content(self, temp_dir, sample_ignition_json):
        """Test assembling after a content file was deleted."""
        output_dir = temp_dir / "decoded"
        await self.coder.disassemble(sample_ignition_json, str(output_dir))
        (output_dir / "etc/motd/0").unlink()

        result = await self.coder.assemble(str(output_dir))

        assert not result.success
        assert "etc/motd/0" in result.errors[0]
        assert result.json_string == ""

    @pytest.mark.asyncio
    async def test_assemble_without_document(self, temp_dir):
        """Test assembling a directory that holds no config."""
        result = await self.coder.assemble(str(temp_dir))

        assert not result.success
        assert "no .ign file" in result.errors[0]

    @pytest.mark.asyncio
    async def test_profiling_records_operations(self, temp_dir, sample_ignition_json):
        """Test that both operations are profiled."""
        output_dir = temp_dir / "decoded"

        await self.coder.disassemble(sample_ignition_json, str(output_dir))
        await self.coder.assemble(str(output_dir))

        summary = self.coder.profiler.get_performance_summary()
        assert [op["name"] for op in summary["operations"]] == ["disassemble", "assemble"]
        assert summary["total_files_processed"] == 10
