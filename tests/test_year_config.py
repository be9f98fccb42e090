"""Tests for year configuration tables and the override service."""

import json
from decimal import Decimal

import pytest

from itr_engine.domain.models.enums import AgeBand, AssessmentYear, EntityType, TaxRegime
from itr_engine.domain.models.year_config import (
    ConfigurationMissingError,
    YearConfiguration,
    YearConfigurationTable,
)
from itr_engine.domain.services.year_config_defaults import default_year_config
from itr_engine.domain.services.year_config_service import YearConfigService

D = Decimal


class TestYearConfigurationTable:

    def test_every_year_present(self, year_table):
        assert len(year_table.years()) == len(AssessmentYear)
        assert "2015-16" in year_table
        assert AssessmentYear.AY_2025_26 in year_table

    def test_unknown_year_not_contained(self, year_table):
        assert "2030-31" not in year_table
        assert "garbage" not in year_table

    def test_get_unknown_year(self, year_table):
        with pytest.raises(ConfigurationMissingError, match="2030-31"):
            year_table.get("2030-31")

    def test_get_year_missing_from_table(self):
        table = YearConfigurationTable({})
        with pytest.raises(ConfigurationMissingError, match="2024-25"):
            table.get("2024-25")

    def test_years_sorted(self, year_table):
        years = [ay.value for ay in year_table.years()]
        assert years == sorted(years)


class TestDefaults:

    def test_reference_year(self, config_2024):
        assert config_2024.assessment_year == AssessmentYear.AY_2024_25
        assert config_2024.new_regime_available is True
        assert config_2024.tax_rates.cess == D("4")
        assert config_2024.filing_due_dates.non_audit == "2024-07-31"
        assert config_2024.source == "hardcoded"

    def test_2025_rates(self):
        config = default_year_config(AssessmentYear.AY_2025_26)
        assert config.tax_rates.stcg_111a == D("20")
        assert config.tax_rates.ltcg_112a_rate == D("12.5")
        assert config.tax_rates.ltcg_112a_exemption == D("125000")
        assert config.deduction_limits.hp_loss_setoff_limit == D("200000")

    def test_no_new_regime_before_2020_21(self):
        assert default_year_config(AssessmentYear.AY_2019_20).new_regime_available is False
        assert default_year_config(AssessmentYear.AY_2020_21).new_regime_available is True

    def test_defaults_are_independent_copies(self):
        a = default_year_config(AssessmentYear.AY_2022_23)
        b = default_year_config(AssessmentYear.AY_2023_24)
        a.tax_rates.cess = D("10")
        assert b.tax_rates.cess == D("4")

    def test_slabs_for_falls_back_to_below_60(self, config_2024):
        huf = config_2024.slab_table(EntityType.HUF)
        assert huf.slabs_for(TaxRegime.OLD, AgeBand.SENIOR) == huf.slabs_for(TaxRegime.OLD, AgeBand.BELOW_60)

    def test_slab_table_falls_back_to_individual(self, config_2024):
        assert config_2024.slab_table(EntityType.COMPANY) is config_2024.slab_table(EntityType.INDIVIDUAL)

    def test_rebate_rules(self, config_2024):
        individual = config_2024.slab_table(EntityType.INDIVIDUAL)
        assert individual.rebate_for(TaxRegime.OLD).limit == D("12500")
        assert individual.rebate_for(TaxRegime.NEW).income_ceiling == D("700000")
        assert config_2024.slab_table(EntityType.HUF).rebate_for(TaxRegime.OLD) is None


class TestSerialization:

    def test_dict_round_trip(self, config_2024):
        restored = YearConfiguration.from_dict(json.loads(json.dumps(config_2024.to_dict())))
        assert restored == config_2024

    def test_deduction_limits_carry_house_property_caps_only(self, config_2024):
        assert set(config_2024.to_dict()["deduction_limits"]) == {
            "hp_loss_setoff_limit",
            "hp_interest_deduction_limit_sop",
        }

    def test_missing_sections_keep_defaults(self, config_2024):
        data = config_2024.to_dict()
        del data["tax_rates"]
        del data["company"]
        restored = YearConfiguration.from_dict(data)
        assert restored.tax_rates.winnings == D("30")
        assert restored.company.domestic_rate_small == D("25")


class TestYearConfigService:

    def _write_override(self, tmp_path, cess="5"):
        data = default_year_config(AssessmentYear.AY_2024_25).to_dict()
        data["tax_rates"]["cess"] = cess
        path = tmp_path / "year_config.json"
        path.write_text(json.dumps({"2024-25": data}), encoding="utf-8")
        return path

    def test_file_override(self, tmp_path):
        service = YearConfigService(str(self._write_override(tmp_path)))
        config = service.get("2024-25")
        assert config.tax_rates.cess == D("5")
        assert config.source == "file"
        assert service.get("2023-24").source == "hardcoded"

    def test_missing_file_uses_defaults(self, tmp_path):
        service = YearConfigService(str(tmp_path / "absent.json"))
        assert service.get("2024-25").source == "hardcoded"

    def test_empty_path_uses_defaults(self):
        assert YearConfigService("").get("2024-25").tax_rates.cess == D("4")

    def test_table_cached(self, tmp_path):
        service = YearConfigService(str(tmp_path / "absent.json"))
        assert service.table() is service.table()

    def test_reload_picks_up_changes(self, tmp_path):
        path = self._write_override(tmp_path)
        service = YearConfigService(str(path))
        assert service.get("2024-25").tax_rates.cess == D("5")
        self._write_override(tmp_path, cess="6")
        assert service.get("2024-25").tax_rates.cess == D("5")
        service.reload()
        assert service.get("2024-25").tax_rates.cess == D("6")

    def test_unknown_year(self):
        with pytest.raises(ConfigurationMissingError):
            YearConfigService("").get("2030-31")
