"""Tests de l'interface web (client de test Flask)."""

from sts.web.forms import today


def _spindles(web_app):
    return web_app.stores.spindles.list()


def _yedeks(web_app):
    return web_app.stores.yedeks.list()


class TestAuthentication:
    def test_pages_require_login(self, client):
        response = client.get("/spindles")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")

    def test_unknown_path_redirects_when_logged_out(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")

    def test_login_page(self, client):
        response = client.get("/login")
        assert response.status_code == 200
        assert "Giriş Ekranı" in response.get_data(as_text=True)

    def test_wrong_credentials(self, client, web_app):
        response = client.post("/login", data={"username": "BAKIM", "password": "wrong"})
        assert response.status_code == 200
        assert "Kullanıcı adı veya şifre hatalı." in response.get_data(as_text=True)
        assert len(web_app.sessions) == 0

    def test_login_sets_session_cookie(self, client, web_app):
        response = client.post("/login", data={"username": "BAKIM", "password": "MAXIME"})
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/spindles")
        cookie = response.headers["Set-Cookie"]
        assert cookie.startswith("sid=")
        assert "HttpOnly" in cookie
        assert len(web_app.sessions) == 1

    def test_logout_destroys_session(self, logged_in, web_app):
        response = logged_in.get("/logout")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")
        assert len(web_app.sessions) == 0
        assert logged_in.get("/spindles").status_code == 302

    def test_forged_cookie_rejected(self, client):
        client.set_cookie("sid", "0" * 32)
        assert client.get("/spindles").status_code == 302

    def test_expired_sessions_purged_on_request(self, web_app):
        now = [1000.0]
        web_app.sessions.clock = lambda: now[0]
        for _ in range(5):
            fresh = web_app.app.test_client()
            fresh.post("/login", data={"username": "BAKIM", "password": "MAXIME"})
        assert len(web_app.sessions) == 5

        now[0] += web_app.sessions.lifetime + 1
        response = web_app.app.test_client().get("/spindles")
        assert response.status_code == 302
        assert len(web_app.sessions) == 0

    def test_static_path_requires_login(self, client):
        response = client.get("/static/style.css")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login")


class TestSpindlePages:
    def test_index_lists_spindles(self, logged_in):
        response = logged_in.get("/")
        assert response.status_code == 200
        assert "Spindle Takip Sistemi" in response.get_data(as_text=True)

    def test_empty_list(self, logged_in):
        assert "Kayıt bulunamadı." in logged_in.get("/spindles").get_data(as_text=True)

    def test_add_form_prefills_date(self, logged_in):
        response = logged_in.get("/spindles/add")
        assert response.status_code == 200
        assert today() in response.get_data(as_text=True)

    def test_add(self, logged_in, web_app):
        response = logged_in.post("/spindles/add", data={
            "reference_id": "SP-1",
            "operating_hours": "120",
            "machine": "CNC-4",
            "installed_on": "",
        })
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/spindles")

        records = _spindles(web_app)
        assert len(records) == 1
        record = records[0]
        assert record.id == "1"
        assert record.reference_id == "SP-1"
        assert record.operating_hours == "120"
        assert record.machine == "CNC-4"
        assert record.installed_on == today()
        assert record.last_updated == today()

    def test_add_requires_reference(self, logged_in, web_app):
        response = logged_in.post("/spindles/add", data={"reference_id": "", "machine": "CNC-4"})
        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert "zorunludur" in body
        assert "CNC-4" in body
        assert _spindles(web_app) == []

    def test_search(self, logged_in, web_app):
        web_app.stores.spindles.add({"reference_id": "ALPHA-1"})
        web_app.stores.spindles.add({"reference_id": "BETA-2"})

        body = logged_in.get("/spindles?q=alpha").get_data(as_text=True)
        assert "ALPHA-1" in body
        assert "BETA-2" not in body

    def test_values_escaped(self, logged_in, web_app):
        web_app.stores.spindles.add({"reference_id": "<b>x</b>"})
        body = logged_in.get("/spindles").get_data(as_text=True)
        assert "&lt;b&gt;x&lt;/b&gt;" in body
        assert "<b>x</b>" not in body

    def test_edit_form(self, logged_in, web_app):
        web_app.stores.spindles.add({"reference_id": "SP-1", "machine": "CNC-4"})
        response = logged_in.get("/spindles/1/edit")
        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert "Spindle Düzenle" in body
        assert "CNC-4" in body

    def test_edit(self, logged_in, web_app):
        web_app.stores.spindles.add({
            "reference_id": "SP-1", "operating_hours": "10",
            "installed_on": "01.01.2024", "last_updated": "01.01.2024",
        })
        response = logged_in.post("/spindles/1/edit", data={
            "reference_id": "SP-1",
            "operating_hours": "250",
            "machine": "",
            "installed_on": "",
        })
        assert response.status_code == 302

        record = _spindles(web_app)[0]
        assert record.id == "1"
        assert record.operating_hours == "250"
        assert record.installed_on == ""
        assert record.last_updated == today()

    def test_edit_requires_reference(self, logged_in, web_app):
        web_app.stores.spindles.add({"reference_id": "SP-1"})
        response = logged_in.post("/spindles/1/edit", data={"reference_id": ""})
        assert response.status_code == 200
        assert _spindles(web_app)[0].reference_id == "SP-1"

    def test_edit_unknown_id_redirects(self, logged_in):
        response = logged_in.get("/spindles/42/edit")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/spindles")

    def test_non_numeric_id_not_found(self, logged_in):
        assert logged_in.get("/spindles/abc/edit").status_code == 404

    def test_delete(self, logged_in, web_app):
        web_app.stores.spindles.add({"reference_id": "SP-1"})
        web_app.stores.spindles.add({"reference_id": "SP-2"})

        response = logged_in.post("/spindles/1/delete")
        assert response.status_code == 302
        assert [r.reference_id for r in _spindles(web_app)] == ["SP-2"]

    def test_delete_unknown_id(self, logged_in):
        assert logged_in.post("/spindles/9/delete").status_code == 302

    def test_delete_requires_post(self, logged_in, web_app):
        web_app.stores.spindles.add({"reference_id": "SP-1"})
        assert logged_in.get("/spindles/1/delete").status_code == 405
        assert len(_spindles(web_app)) == 1


class TestYedekPages:
    def test_list(self, logged_in):
        response = logged_in.get("/yedeks")
        assert response.status_code == 200
        assert "Yedek Takip Sistemi" in response.get_data(as_text=True)

    def test_add_defaults(self, logged_in, web_app):
        response = logged_in.post("/yedeks/add", data={"reference_id": "Y-1", "description": "Rulman"})
        assert response.status_code == 302

        record = _yedeks(web_app)[0]
        assert record.description == "Rulman"
        assert record.in_repair == "Hayır"
        assert record.sent_to_repair_on == today()
        assert record.returned_on == today()
        assert record.removed_on == today()
        assert record.removed_from == ""
        assert record.last_updated == today()

    def test_edit_keeps_empty_dates_empty(self, logged_in, web_app):
        web_app.stores.yedeks.add({"reference_id": "Y-1", "in_repair": "Hayır"})
        logged_in.post("/yedeks/1/edit", data={
            "reference_id": "Y-1",
            "in_repair": "Evet",
            "sent_to_repair_on": "",
        })
        record = _yedeks(web_app)[0]
        assert record.in_repair == "Evet"
        assert record.sent_to_repair_on == ""

    def test_edit_form_selects_repair_state(self, logged_in, web_app):
        web_app.stores.yedeks.add({"reference_id": "Y-1", "in_repair": "Evet"})
        body = logged_in.get("/yedeks/1/edit").get_data(as_text=True)
        assert '<option value="Evet" selected>' in body

    def test_delete(self, logged_in, web_app):
        web_app.stores.yedeks.add({"reference_id": "Y-1"})
        logged_in.post("/yedeks/1/delete")
        assert _yedeks(web_app) == []


class TestExport:
    def test_download(self, logged_in, web_app):
        web_app.stores.spindles.add({"reference_id": "SP-1", "operating_hours": "5"})
        web_app.stores.yedeks.add({"reference_id": "Y-1", "in_repair": "Evet"})

        response = logged_in.get("/export")
        assert response.status_code == 200
        assert response.headers["Content-Type"] == "text/csv; charset=utf-8"
        assert response.headers["Content-Disposition"] == 'attachment; filename="takip_export.csv"'

        body = response.get_data(as_text=True)
        assert body.startswith("--- Spindle Takip ---\n")
        assert "SP-1,5,,," in body
        assert "\n\n--- Yedek Takip ---\n" in body
        assert "Y-1,,Evet," in body

    def test_requires_login(self, client):
        assert client.get("/export").status_code == 302


class TestErrors:
    def test_unknown_path_when_logged_in(self, logged_in):
        response = logged_in.get("/nowhere")
        assert response.status_code == 404
        assert response.get_data(as_text=True) == "Not Found"
        assert response.headers["Content-Type"].startswith("text/plain")

    def test_unreadable_store_returns_500(self, logged_in, web_app):
        web_app.stores.spindles.path.unlink()
        response = logged_in.get("/spindles")
        assert response.status_code == 500
