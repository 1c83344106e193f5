"""Tests for news, offers, partners, makes, FAQs, feedback and admins."""

import uuid

import pytest

from conftest import make_upload, small_jpeg, stored_files
from services import (
    admin_service,
    car_service,
    faq_service,
    feedback_service,
    make_service,
    news_service,
    offer_service,
    partner_service,
)
from utils.errors import NotFoundError, UnauthorizedError, ValidationError

NEWS_FORM = {"title_en": "Opening", "title_ar": "افتتاح", "details_en": "We opened", "details_ar": "افتتحنا"}


def _image(name="a.jpg"):
    return make_upload(small_jpeg(), name=name, field="image")


class TestNews:
    def test_new_image_supersedes_old_after_commit(self, uploads_root):
        item = news_service.create_news(NEWS_FORM, _image())
        updated = news_service.update_news(uuid.UUID(item["id"]), {"title_en": "Grand opening"}, _image("b.jpg"))

        assert updated["title"]["en"] == "Grand opening"
        assert updated["image"] != item["image"]
        assert stored_files(uploads_root) == {updated["image"]}

    def test_update_without_image_keeps_it(self, uploads_root):
        item = news_service.create_news(NEWS_FORM, _image())
        updated = news_service.update_news(uuid.UUID(item["id"]), {"details_ar": "جديد"})
        assert updated["image"] == item["image"]

    def test_missing_title_stores_nothing(self, uploads_root):
        with pytest.raises(ValidationError):
            news_service.create_news({"details_en": "x", "details_ar": "y"}, _image())
        assert stored_files(uploads_root) == set()

    def test_not_found_message_names_the_id(self):
        missing = uuid.uuid4()
        with pytest.raises(NotFoundError) as exc:
            news_service.get_news(missing)
        assert str(missing) in exc.value.message["en"]

    def test_delete_removes_image(self, uploads_root):
        item = news_service.create_news(NEWS_FORM, _image())
        news_service.delete_news(uuid.UUID(item["id"]))
        assert stored_files(uploads_root) == set()


class TestOffers:
    def test_show_filter(self):
        offer_service.create_offer({**NEWS_FORM, "show": "false"})
        offer_service.create_offer(NEWS_FORM)
        assert len(offer_service.list_offers()) == 2
        assert len(offer_service.list_offers(show=True)) == 1
        assert offer_service.list_offers(show=False)[0]["show"] is False


class TestPartners:
    def test_image_required_on_create(self):
        with pytest.raises(ValidationError):
            partner_service.create_partner({"name": "Shell", "url": "https://shell.com"})

    def test_create_and_replace_image(self, uploads_root):
        p = partner_service.create_partner({"name": "Shell", "url": "https://shell.com"}, _image())
        updated = partner_service.update_partner(uuid.UUID(p["id"]), {}, _image("new.jpg"))
        assert stored_files(uploads_root) == {updated["image"]}


class TestMakes:
    def test_duplicate_name_is_rejected(self):
        make_service.create_make({"name": {"en": "Audi", "ar": "أودي"}})
        with pytest.raises(ValidationError):
            make_service.create_make({"name": {"en": "audi", "ar": "أودي"}})

    def test_make_in_use_cannot_be_deleted(self):
        car_service.create_car({
            "make": "Audi", "model_en": "Q7", "model_ar": "كيو 7", "name_en": "Audi Q7",
            "name_ar": "أودي كيو 7", "year": "2024", "condition": "Elite Approved",
            "mileage": "1000", "stockNumber": "A-1", "price": "1",
        })
        make = make_service.list_makes()[0]
        with pytest.raises(ValidationError):
            make_service.delete_make(uuid.UUID(make["id"]))


class TestFaqs:
    def test_requires_both_languages(self):
        with pytest.raises(ValidationError):
            faq_service.create_faq({"question": {"en": "Q"}, "answer": {"en": "A", "ar": "ج"}})

    def test_update(self):
        faq = faq_service.create_faq({"question": {"en": "Q", "ar": "س"}, "answer": {"en": "A", "ar": "ج"}})
        updated = faq_service.update_faq(uuid.UUID(faq["id"]), {"answer": {"en": "B"}})
        assert updated["answer"] == {"en": "B", "ar": "ج"}


class TestFeedback:
    def test_email_is_validated(self):
        with pytest.raises(ValidationError):
            feedback_service.submit_feedback(
                {"fullName": "Sara", "mobileNumber": "050", "email": "not-an-email", "message": "hi"}
            )

    def test_submit_and_list(self):
        feedback_service.submit_feedback(
            {"fullName": "Sara", "mobileNumber": "050", "email": "sara@example.com", "message": "hi"}
        )
        items, total = feedback_service.list_feedback()
        assert total == 1
        assert items[0]["fullName"] == "Sara"


class TestAdmins:
    def test_login(self, admin):
        assert admin_service.login("ROOT@alweamcars.com", "secret123")
        with pytest.raises(UnauthorizedError):
            admin_service.login("root@alweamcars.com", "wrong")
        with pytest.raises(ValidationError):
            admin_service.login("", "")

    def test_short_password_and_duplicate_email(self, admin):
        with pytest.raises(ValidationError):
            admin_service.create_admin({"name": "A", "mobile": "1", "email": "a@b.com", "password": "123"})
        with pytest.raises(ValidationError):
            admin_service.create_admin(
                {"name": "A", "mobile": "1", "email": "root@alweamcars.com", "password": "123456"}
            )

    def test_seed_root_admin(self, monkeypatch):
        import config
        monkeypatch.setattr(config, "ROOT_ADMIN_PASSWORD", "rootpass")
        created = admin_service.seed_root_admin()
        assert created["email"] == config.ROOT_ADMIN_EMAIL
        assert admin_service.seed_root_admin() is None
