# ABOUTME: Tests for the recursive field normalizer
# ABOUTME: Covers key casing, rich text, references, link stripping, and acf image scheduling

from wordpress_source.normalize import AssetDescriptor, FieldNormalizer, Reference, TypeNamer

NAMER = TypeNamer("WordPress")


def _normalizer(downloader=None) -> FieldNormalizer:
    return FieldNormalizer(NAMER, downloader=downloader)


def test_user_record_fields():
    record = {"id": 7, "name": "Jane", "avatar_urls": {"24": "url24", "96": "url96"}}

    fields = _normalizer().normalize(record)

    assert fields == {"id": 7, "name": "Jane", "avatarUrls": {"24": "url24", "96": "url96"}}


def test_rendered_is_unwrapped():
    fields = _normalizer().normalize({"title": {"rendered": "<p>Hi</p>"}})
    assert fields["title"] == "<p>Hi</p>"


def test_link_keys_are_dropped():
    fields = _normalizer().normalize({"id": 1, "_links": {"self": []}, "_embedded": {"author": []}})
    assert fields == {"id": 1}


def test_keys_are_camel_cased_recursively():
    fields = _normalizer().normalize({"meta_box": {"inner_value": [{"deep_key": None}]}})
    assert fields == {"metaBox": {"innerValue": [{"deepKey": None}]}}


def test_foreign_entity_becomes_reference():
    fields = _normalizer().normalize({"related": {"ID": 42, "post_type": "page", "post_title": "About"}})
    assert fields["related"] == Reference(type_name="WordPressPage", id=42)


def test_attachment_becomes_reference():
    fields = _normalizer().normalize({"file": {"id": 5, "filename": "report.pdf"}})
    assert fields["file"] == Reference(type_name="WordPressAttachment", id=5)


def test_sequence_of_entities():
    fields = _normalizer().normalize({"items": [{"ID": 1, "post_type": "post"}, {"ID": 2, "post_type": "post"}]})
    assert fields["items"] == [
        Reference(type_name="WordPressPost", id=1),
        Reference(type_name="WordPressPost", id=2),
    ]


def test_reference_factory_is_used():
    created = []

    def factory(type_name, id):
        created.append((type_name, id))
        return Reference(type_name=type_name, id=id)

    FieldNormalizer(NAMER, reference_factory=factory).normalize({"r": {"ID": 3, "post_type": "product"}})

    assert created == [("WordPressProduct", 3)]


def test_images_outside_acf_are_left_alone(recording_downloader):
    record = {"cover": "https://cdn.example.com/cover.jpg", "image": {"type": "image", "filename": "a.jpg", "url": "https://cdn.example.com/a.jpg", "id": 1}}

    fields = _normalizer(recording_downloader).normalize(record)

    assert fields["cover"] == "https://cdn.example.com/cover.jpg"
    assert fields["image"] == Reference(type_name="WordPressAttachment", id=1)
    assert recording_downloader.scheduled == []


def test_acf_images_are_scheduled(recording_downloader):
    record = {
        "acf": {
            "hero_image": {
                "ID": 12,
                "type": "image",
                "filename": "Hero Shot.JPG",
                "url": "https://cdn.example.com/2024/05/Hero-Shot.jpg",
                "title": "Hero",
                "description": "A hero shot",
            },
            "gallery": ["https://cdn.example.com/one.png", "not an image"],
        }
    }

    fields = _normalizer(recording_downloader).normalize(record)

    hero = fields["acf"]["heroImage"]
    assert isinstance(hero, AssetDescriptor)
    assert hero.src == "/srv/images/hero-shot.jpg"
    assert hero.title == "Hero"
    assert hero.alt == "A hero shot"
    assert hero.remote_url == "https://cdn.example.com/2024/05/Hero-Shot.jpg"
    assert fields["acf"]["gallery"] == ["/srv/images/one.png", "not an image"]
    assert recording_downloader.scheduled == [
        ("https://cdn.example.com/2024/05/Hero-Shot.jpg", "hero-shot.jpg"),
        ("https://cdn.example.com/one.png", "one.png"),
    ]


def test_acf_without_downloader_keeps_urls():
    record = {"acf": {"photo": "https://cdn.example.com/one.png"}}
    assert _normalizer().normalize(record) == {"acf": {"photo": "https://cdn.example.com/one.png"}}


def test_normalization_is_pure_without_downloader():
    record = {"id": 1, "title": {"rendered": "T"}, "meta": {"a_b": [1, {"c_d": None}]}}
    normalizer = _normalizer()

    first = normalizer.normalize(record)
    second = normalizer.normalize(record)

    assert first == second
    assert record == {"id": 1, "title": {"rendered": "T"}, "meta": {"a_b": [1, {"c_d": None}]}}


def test_malformed_acf_image_url_is_kept(recording_downloader):
    record = {"acf": {"photo": "https://[bad/x.png"}}

    fields = _normalizer(recording_downloader).normalize(record)

    assert fields == {"acf": {"photo": "https://[bad/x.png"}}
    assert recording_downloader.scheduled == []
