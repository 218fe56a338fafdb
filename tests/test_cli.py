"""
VoidFX -- CLI tests.
Runs voidfx.main() in-process with argv lists.
"""

import numpy as np
import pytest
from PIL import Image

import voidfx


class TestParamParsing:

    def test_numbers(self):
        assert voidfx._parse_param_value("3") == 3.0
        assert voidfx._parse_param_value("0.25") == 0.25
        assert voidfx._parse_param_value("1e-3") == 0.001

    def test_tuple(self):
        assert voidfx._parse_param_value("(0.4, 0.5)") == (0.4, 0.5)

    @pytest.mark.parametrize("val", ["nan", "inf", "-inf", "(1, nan)", "(inf, 0)"])
    def test_rejects_non_finite(self, val):
        with pytest.raises(ValueError, match="NaN/Inf"):
            voidfx._parse_param_value(val)

    def test_rejects_long_tuple(self):
        with pytest.raises(ValueError, match="too long"):
            voidfx._parse_param_value("(1, 2, 3, 4, 5)")

    def test_parse_params(self):
        assert voidfx._parse_params(["radius=0.08", "center=(0.4,0.5)"]) == {
            "radius": 0.08, "center": (0.4, 0.5),
        }

    def test_parse_params_errors(self):
        with pytest.raises(ValueError, match="key=value"):
            voidfx._parse_params(["radius"])
        with pytest.raises(ValueError, match="cannot be set"):
            voidfx._parse_params(["time=3"])


class TestCommands:

    def test_list_effects(self, capsys):
        voidfx.main(["list-effects"])
        out = capsys.readouterr().out
        for name in ("blackhole", "spacetimerip", "screendistortion", "lensing"):
            assert name in out
        assert "Total: 4 effects" in out

    def test_list_effects_category(self, capsys):
        voidfx.main(["list-effects", "--category", "post", "--compact"])
        out = capsys.readouterr().out
        assert "lensing" in out
        assert "blackhole" not in out

    def test_info(self, capsys):
        voidfx.main(["info", "blackhole"])
        out = capsys.readouterr().out
        assert "accretion_radius" in out
        assert "Event horizon radius" in out

    def test_info_fuzzy(self, capsys):
        voidfx.main(["info", "black"])
        assert "Did you mean: blackhole" in capsys.readouterr().out

    def test_search(self, capsys):
        voidfx.main(["search", "swirl"])
        assert "lensing" in capsys.readouterr().out

    def test_render(self, tmp_path, capsys):
        out_path = tmp_path / "hole.png"
        voidfx.main([
            "render", "blackhole", "-o", str(out_path),
            "--width", "32", "--height", "24", "--time", "1.5",
            "--params", "radius=0.08", "--workers", "2",
        ])
        assert out_path.exists()
        with Image.open(out_path) as img:
            assert img.size == (32, 24)
            assert img.mode == "RGBA"
        assert "Rendered blackhole" in capsys.readouterr().out

    def test_render_with_source(self, tmp_path, test_frame):
        src = tmp_path / "src.png"
        Image.fromarray(test_frame).save(src)
        out_path = tmp_path / "lensed.png"
        voidfx.main([
            "render", "lensing", "-o", str(out_path), "--source", str(src),
            "--width", "16", "--height", "16", "--params", "strength=0",
        ])
        with Image.open(out_path) as img:
            pixels = np.array(img)
        assert pixels.shape == (16, 16, 4)
        assert np.all(pixels[:, :, 3] == 255)

    def test_render_missing_source_fails(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            voidfx.main(["render", "lensing", "-o", str(tmp_path / "x.png"), "--width", "8", "--height", "8"])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_render_invalid_radii(self, tmp_path, capsys):
        args = ["render", "blackhole", "-o", str(tmp_path / "x.png"), "--width", "8", "--height", "8",
                "--params", "radius=0.3", "--params", "accretion_radius=0.2"]
        with pytest.raises(SystemExit):
            voidfx.main(args)
        assert "accretion" in capsys.readouterr().err
        voidfx.main(args + ["--no-validate"])
        assert (tmp_path / "x.png").exists()

    def test_render_bad_param_value(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            voidfx.main(["render", "blackhole", "-o", str(tmp_path / "x.png"), "--params", "radius=nan"])
        assert exc.value.code == 1

    def test_unknown_effect_rejected_by_argparse(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            voidfx.main(["render", "wormhole", "-o", str(tmp_path / "x.png")])
        assert exc.value.code == 2

    def test_sequence(self, tmp_path, capsys):
        out_dir = tmp_path / "frames"
        voidfx.main([
            "sequence", "spacetimerip", "-o", str(out_dir),
            "--frames", "3", "--fps", "12", "--width", "16", "--height", "8",
        ])
        written = sorted(p.name for p in out_dir.iterdir())
        assert written == ["frame_00000.png", "frame_00001.png", "frame_00002.png"]
        assert "Wrote 3 frames" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        voidfx.main([])
        assert "usage" in capsys.readouterr().out.lower()
