"""시딩/갤러리 스크립트 테스트. Medusa Admin과 Gemini는 가짜 구현으로 대체."""

from conftest import FakeGenerator
from core.config import settings
from scripts import regenerate_gallery, seed_medusa_products
from scripts.regenerate_gallery import ImageSpec, all_specs, parse_only
from scripts.seed_medusa_products import product_payload, seed_category, variant_payload
from service.catalog import CATEGORIES, STYLES, build_variants_for_category, handmade_price


class FakeAdmin:
    def __init__(self, products=None):
        self.products = products or {}
        self.created_variants = []
        self.deleted = []

    def find_product(self, handle):
        return self.products.get(handle)

    def create_product(self, payload):
        return "prod_new"

    def create_variant(self, product_id, payload):
        self.created_variants.append((product_id, payload["title"]))
        return {"id": f"var_{len(self.created_variants)}"}

    def delete_product(self, product_id):
        self.deleted.append(product_id)


class TestSeedPayloads:
    def test_product_payload(self):
        payload = product_payload("pets", "col_1")
        assert payload["handle"] == "art-transform-pets"
        assert payload["collection_id"] == "col_1"
        assert payload["thumbnail"].endswith("/pets-oil-painting-1.png")
        assert [o["title"] for o in payload["options"]] == ["Style", "Type", "Size", "Mood"]

    def test_variant_payload(self):
        variant = next(
            v for v in build_variants_for_category("family")
            if v.type == "handmade" and v.size == "12x16" and v.mood == "heritage"
        )
        payload = variant_payload("family", variant)
        assert payload["prices"] == [{"amount": handmade_price("family", "12x16"), "currency_code": "usd"}]
        assert payload["options"]["Mood"] == "heritage"
        assert payload["metadata"]["images"][0].endswith(f"/heritage--family-{variant.style}-1.png")


class TestSeedCategory:
    def test_new_product_gets_all_variants(self):
        admin = FakeAdmin()
        assert seed_category(admin, "kids", "col_1", dry_run=False, delete_existing=False) == 216
        assert {pid for pid, _ in admin.created_variants} == {"prod_new"}

    def test_resume_skips_existing_titles(self):
        done = [{"title": v.title} for v in build_variants_for_category("pets")[:10]]
        admin = FakeAdmin({"art-transform-pets": {"id": "prod_1", "variants": done}})

        assert seed_category(admin, "pets", None, dry_run=False, delete_existing=False) == 206
        titles = {title for _, title in admin.created_variants}
        assert not titles & {d["title"] for d in done}

    def test_dry_run_writes_nothing(self):
        admin = FakeAdmin({"art-transform-pets": {"id": "prod_1", "variants": []}})
        assert seed_category(admin, "pets", None, dry_run=True, delete_existing=True) == 216
        assert admin.created_variants == []
        assert admin.deleted == []

    def test_delete_existing(self):
        admin = FakeAdmin({"art-transform-pets": {"id": "prod_1", "variants": []}})
        seed_category(admin, "pets", None, dry_run=False, delete_existing=True)
        assert admin.deleted == ["prod_1"]

    def test_main_requires_admin_credentials(self, monkeypatch):
        monkeypatch.setattr(settings, "MEDUSA_BACKEND_URL", "")
        assert seed_medusa_products.main([]) == 1


class TestGallerySpecs:
    def test_filename(self):
        assert ImageSpec("pets", "pastel", 2).filename == "pets-pastel-2.png"
        assert ImageSpec("kids", "acrylic", 1, "heritage").filename == "heritage--kids-acrylic-1.png"

    def test_all_specs(self):
        specs = all_specs("classic", 2)
        assert len(specs) == len(CATEGORIES) * len(STYLES) * 2

    def test_parse_only(self):
        specs = parse_only("family-oil-painting-1, self-portrait-pencil-sketch-3, bogus-1", "classic", 3)
        assert specs == [
            ImageSpec("family", "oil-painting", 1),
            ImageSpec("self-portrait", "pencil-sketch", 3),
        ]


class TestRegenerateGallery:
    def test_writes_images(self, monkeypatch, tmp_path):
        generator = FakeGenerator()
        monkeypatch.setattr(settings, "GOOGLE_API_KEY", "test-key")
        monkeypatch.setattr(settings, "GALLERY_DIR", str(tmp_path))
        monkeypatch.setattr(regenerate_gallery, "GeminiImageGenerator", lambda **kwargs: generator)
        monkeypatch.setattr(regenerate_gallery.time, "sleep", lambda s: None)

        code = regenerate_gallery.main(["--only=pets-watercolor-1,pets-watercolor-2", "--mood=royal_noble"])

        assert code == 0
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "royal_noble--pets-watercolor-1.png",
            "royal_noble--pets-watercolor-2.png",
        ]
        assert len(generator.calls) == 2

    def test_failure_sets_exit_code(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "GOOGLE_API_KEY", "test-key")
        monkeypatch.setattr(settings, "GALLERY_DIR", str(tmp_path))
        monkeypatch.setattr(regenerate_gallery, "GeminiImageGenerator", lambda **kwargs: FakeGenerator(fail=True))
        monkeypatch.setattr(regenerate_gallery.time, "sleep", lambda s: None)

        assert regenerate_gallery.main(["--only=kids-charcoal-1"]) == 1
        assert list(tmp_path.iterdir()) == []

    def test_nothing_to_generate(self, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_API_KEY", "test-key")
        assert regenerate_gallery.main(["--only=nothing-here-1"]) == 1
