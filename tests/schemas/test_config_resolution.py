"""Test config resolution and validation with Pydantic."""

import pytest
from pydantic import ValidationError

from soltemp.schemas import ParamConfig, UserConfig, CLIConfig, InternalConfig
from soltemp.schemas.resolve import deep_merge, resolve_config

pytestmark = pytest.mark.unit


class TestConfigResolution:
    """Test resolve_config() precedence and merging."""

    def test_resolve_config_all_defaults(self):
        config = resolve_config(ParamConfig(), None, None)

        assert isinstance(config, InternalConfig)
        assert config.corrector.beta == 0.003
        assert config.corrector.max_abs_correction_c == 20.0
        assert config.reader.delimiter == ";"
        assert config.reader.input_dir is None
        assert config.normalizer.min_day_of_year == 1
        assert config.normalizer.max_day_of_year == 366
        assert config.periodicity.n_period_bins == 500
        assert config.output.format == "csv"
        assert config.logging.level == "INFO"

    def test_user_config_overrides_param_config(self):
        user = UserConfig(BETA=0.004, INPUT_DIR="/data/in", N_WORKERS=8)
        config = resolve_config(ParamConfig(), user, None)

        assert config.corrector.beta == 0.004
        assert config.reader.input_dir == "/data/in"
        assert config.processor.n_workers == 8

    def test_cli_overrides_user(self):
        user = UserConfig(BETA=0.004, BASE_DIR="/user/out")
        cli = CLIConfig(beta=0.005, log_level="DEBUG")
        config = resolve_config(ParamConfig(), user, cli)

        assert config.corrector.beta == 0.005
        assert config.base_dir == "/user/out"
        assert config.logging.level == "DEBUG"

    def test_dict_inputs_accepted(self):
        config = resolve_config({}, {"BETA": 0.002}, {"n_workers": 2})
        assert config.corrector.beta == 0.002
        assert config.processor.n_workers == 2

    def test_nested_user_overrides(self):
        user = UserConfig(
            reader={"delimiter": ",", "file_pattern": "*.txt"},
            periodicity={"period_max_years": 30.0},
        )
        config = resolve_config(ParamConfig(), user, None)

        assert config.reader.delimiter == ","
        assert config.reader.file_pattern == "*.txt"
        assert config.periodicity.period_max_years == 30.0
        assert config.periodicity.period_min_years == 0.5

    def test_flat_alias_and_nested_section_merge(self):
        user = UserConfig(BETA=0.004, corrector={"max_abs_correction_c": 5})
        config = resolve_config(ParamConfig(), user, None)
        assert config.corrector.beta == 0.004
        assert config.corrector.max_abs_correction_c == 5.0

    def test_internal_config_is_frozen(self):
        config = resolve_config(ParamConfig(), None, None)
        with pytest.raises(ValidationError):
            config.base_dir = "/elsewhere"


class TestValidation:

    @pytest.mark.parametrize("beta", [0, 1, 1.5, -0.1])
    def test_beta_out_of_range_rejected(self, beta):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(BETA=beta), None)

    def test_non_positive_cap_rejected(self):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), None, CLIConfig(max_abs_correction_c=0.0))

    def test_day_of_year_order_checked_after_merge(self):
        with pytest.raises(ValidationError, match="min_day_of_year"):
            resolve_config(ParamConfig(), UserConfig(MIN_DAY_OF_YEAR=200, MAX_DAY_OF_YEAR=100), None)

    def test_period_range_checked_after_merge(self):
        with pytest.raises(ValidationError, match="period_min_years"):
            resolve_config(ParamConfig(), UserConfig(periodicity={"period_min_years": 60.0}), None)

    def test_param_config_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            ParamConfig(unknown_section={})

    def test_user_config_ignores_unknown_keys(self):
        user = UserConfig.model_validate({"BETA": 0.003, "RADAR_ID": "KDIX"})
        assert user.beta == 0.003

    def test_user_output_format_normalized(self):
        user = UserConfig(OUTPUT_FORMAT=" Parquet ")
        assert user.output_format == "parquet"

    def test_cli_rejects_bad_log_level(self):
        with pytest.raises(ValidationError):
            CLIConfig(log_level="LOUD")


class TestDeepMerge:

    def test_nested_merge(self):
        base = {"a": 1, "b": {"c": 2, "d": 3}}
        assert deep_merge(base, {"b": {"d": 4, "e": 5}, "f": 6}) == {
            "a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6,
        }

    def test_base_not_mutated(self):
        base = {"b": {"c": 2}}
        deep_merge(base, {"b": {"c": 3}})
        assert base == {"b": {"c": 2}}

    def test_later_overrides_win(self):
        assert deep_merge({"x": 1}, {"x": 2}, {"x": 3}) == {"x": 3}
