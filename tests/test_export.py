"""Tests de l'export combiné."""

from sts.core.export import EXPORT_FILENAME, build_export
from sts.core.records import SpindleRecord, YedekRecord

SPINDLE_HEADER = "Referans ID,Saat,Takılı Olduğu Makine,Takıldığı Tarih,Son Güncelleme"
YEDEK_HEADER = "Referans ID,Açıklama,Tamirde,Gönderildi,Dönen,Söküldüğü Makine,Sökülme Tarihi,Son Güncelleme"


class TestBuildExport:
    def test_empty(self):
        assert build_export([], []) == (
            f"--- Spindle Takip ---\n{SPINDLE_HEADER}\n"
            f"\n\n--- Yedek Takip ---\n{YEDEK_HEADER}\n"
        )

    def test_rows_without_id(self):
        spindles = [
            SpindleRecord(id="1", reference_id="SP-1", operating_hours="100", machine="M1",
                          installed_on="01.01.2024", last_updated="02.01.2024"),
            SpindleRecord(id="2", reference_id="SP-2"),
        ]
        yedeks = [
            YedekRecord(id="5", reference_id="Y-1", description="Rulman", in_repair="Evet",
                        sent_to_repair_on="03.01.2024", returned_on="04.01.2024",
                        removed_from="M2", removed_on="05.01.2024", last_updated="06.01.2024"),
        ]
        assert build_export(spindles, yedeks) == (
            "--- Spindle Takip ---\n"
            f"{SPINDLE_HEADER}\n"
            "SP-1,100,M1,01.01.2024,02.01.2024\n"
            "SP-2,,,,"
            "\n\n--- Yedek Takip ---\n"
            f"{YEDEK_HEADER}\n"
            "Y-1,Rulman,Evet,03.01.2024,04.01.2024,M2,05.01.2024,06.01.2024"
        )

    def test_commas_replaced(self):
        spindles = [SpindleRecord(id="1", reference_id="A,B")]
        assert "A B,,,," in build_export(spindles, [])

    def test_filename(self):
        assert EXPORT_FILENAME == "takip_export.csv"
