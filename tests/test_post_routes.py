import io
import os
import unittest

from api_test_case import ApiTestCase, png_bytes


class TestPostRoutes(ApiTestCase):
    def _post_count(self, user_id):
        return self.client.get(f"/api/users/{user_id}").get_json()["posts"]

    def test_create_post_round_trips_through_get(self):
        email = self._register("alice")
        user_id = self._login(email)["id"]
        headers = self._auth_header(email)

        create_response = self._create_post(
            headers,
            title="T",
            category="C",
            description="twelve+chars",
            filename="holiday.png",
        )
        self.assertEqual(create_response.status_code, 201)
        created = create_response.get_json()
        self.assertEqual(created["creator"], user_id)
        self.assertIn("createdAt", created)
        self.assertIn("updatedAt", created)

        get_response = self.client.get(f"/api/posts/{created['id']}")
        self.assertEqual(get_response.status_code, 200)
        post = get_response.get_json()
        self.assertEqual(post["title"], "T")
        self.assertEqual(post["category"], "C")
        self.assertEqual(post["description"], "twelve+chars")
        self.assertNotEqual(post["thumbnail"], "holiday.png")
        self.assertTrue(post["thumbnail"].startswith("holiday"))
        self.assertTrue(post["thumbnail"].endswith(".png"))
        self.assertEqual(self._uploaded_files(), [post["thumbnail"]])
        self.assertEqual(self._post_count(user_id), 1)

    def test_create_post_requires_auth(self):
        response = self._create_post({})
        self.assertEqual(response.status_code, 402)
        self.assertEqual(
            response.get_json()["message"], "Unauthorized. No token provided."
        )
        self.assertEqual(self._uploaded_files(), [])

    def test_create_post_requires_fields(self):
        email = self._register("alice")
        headers = self._auth_header(email)

        response = self._create_post(headers, title="")
        self.assertEqual(response.status_code, 422)
        self.assertEqual(
            response.get_json()["message"],
            "Fill in all fields and choose a thumbnail.",
        )

    def test_create_post_requires_thumbnail(self):
        email = self._register("alice")
        headers = self._auth_header(email)

        response = self.client.post(
            "/api/posts",
            json={
                "title": "Hello",
                "category": "Tech",
                "description": "a description long enough",
            },
            headers=headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["message"], "Thumbnail is required.")

    def test_create_post_rejects_oversized_thumbnail_before_any_change(self):
        email = self._register("alice")
        user_id = self._login(email)["id"]
        headers = self._auth_header(email)

        response = self._create_post(headers, size=2 * 1024 * 1024 + 1)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.get_json()["message"],
            "Thumbnail too big. File should be less than 2MB.",
        )
        self.assertEqual(self._uploaded_files(), [])
        self.assertEqual(self.client.get("/api/posts").get_json(), [])
        self.assertEqual(self._post_count(user_id), 0)

    def test_get_post_returns_404_for_unknown_id(self):
        response = self.client.get("/api/posts/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["message"], "Post not found.")

    def test_list_posts_orders_by_most_recent_update(self):
        email = self._register("alice")
        headers = self._auth_header(email)

        first = self._create_post(headers, title="first").get_json()
        second = self._create_post(headers, title="second").get_json()

        listed = self.client.get("/api/posts").get_json()
        self.assertEqual([p["id"] for p in listed], [second["id"], first["id"]])

        edit = self.client.patch(
            f"/api/posts/{first['id']}",
            json={
                "title": "first, edited",
                "category": "Tech",
                "description": "a description long enough",
            },
            headers=headers,
        )
        self.assertEqual(edit.status_code, 200)

        listed = self.client.get("/api/posts").get_json()
        self.assertEqual([p["id"] for p in listed], [first["id"], second["id"]])

    def test_category_posts_match_exactly_newest_first(self):
        email = self._register("alice")
        headers = self._auth_header(email)

        older = self._create_post(headers, category="Tech").get_json()
        self._create_post(headers, category="Art")
        self._create_post(headers, category="tech")
        newer = self._create_post(headers, category="Tech").get_json()

        response = self.client.get("/api/posts/categories/Tech")
        self.assertEqual(response.status_code, 200)
        posts = response.get_json()
        self.assertEqual([p["id"] for p in posts], [newer["id"], older["id"]])
        self.assertTrue(all(p["category"] == "Tech" for p in posts))

    def test_user_posts_lists_only_that_creator(self):
        alice_email = self._register("alice")
        bob_email = self._register("bob")
        alice_id = self._login(alice_email)["id"]
        alice_headers = self._auth_header(alice_email)
        bob_headers = self._auth_header(bob_email)

        first = self._create_post(alice_headers, title="alice one").get_json()
        self._create_post(bob_headers, title="bob one")
        second = self._create_post(alice_headers, title="alice two").get_json()

        response = self.client.get(f"/api/posts/users/{alice_id}")
        self.assertEqual(response.status_code, 200)
        posts = response.get_json()
        self.assertEqual([p["id"] for p in posts], [second["id"], first["id"]])

    def test_edit_post_by_owner_without_file_keeps_thumbnail(self):
        email = self._register("alice")
        headers = self._auth_header(email)
        created = self._create_post(headers).get_json()

        response = self.client.patch(
            f"/api/posts/{created['id']}",
            data={
                "title": "New title",
                "category": "Art",
                "description": "a fresh description",
            },
            headers=headers,
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 200)
        post = response.get_json()
        self.assertEqual(post["title"], "New title")
        self.assertEqual(post["category"], "Art")
        self.assertEqual(post["description"], "a fresh description")
        self.assertEqual(post["thumbnail"], created["thumbnail"])
        self.assertEqual(self._uploaded_files(), [created["thumbnail"]])

    def test_edit_post_with_new_thumbnail_replaces_file(self):
        email = self._register("alice")
        headers = self._auth_header(email)
        created = self._create_post(headers).get_json()

        response = self.client.patch(
            f"/api/posts/{created['id']}",
            data={
                "title": "New title",
                "category": "Tech",
                "description": "a fresh description",
                "thumbnail": (io.BytesIO(png_bytes()), "replacement.png"),
            },
            headers=headers,
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 200)
        post = response.get_json()
        self.assertNotEqual(post["thumbnail"], created["thumbnail"])
        self.assertTrue(post["thumbnail"].startswith("replacement"))
        self.assertEqual(self._uploaded_files(), [post["thumbnail"]])

    def test_edit_post_rejects_oversized_thumbnail_and_keeps_old_file(self):
        email = self._register("alice")
        headers = self._auth_header(email)
        created = self._create_post(headers).get_json()

        response = self.client.patch(
            f"/api/posts/{created['id']}",
            data={
                "title": "New title",
                "category": "Tech",
                "description": "a fresh description",
                "thumbnail": (io.BytesIO(png_bytes(2 * 1024 * 1024 + 1)), "big.png"),
            },
            headers=headers,
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self._uploaded_files(), [created["thumbnail"]])
        post = self.client.get(f"/api/posts/{created['id']}").get_json()
        self.assertEqual(post["title"], "Hello")

    def test_edit_post_rejects_short_description(self):
        email = self._register("alice")
        headers = self._auth_header(email)
        created = self._create_post(headers).get_json()

        response = self.client.patch(
            f"/api/posts/{created['id']}",
            json={"title": "Hello", "category": "Tech", "description": "too short"},
            headers=headers,
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.get_json()["message"], "Fill in all fields.")

    def test_edit_post_returns_404_for_unknown_post(self):
        email = self._register("alice")
        headers = self._auth_header(email)

        response = self.client.patch(
            "/api/posts/999",
            json={
                "title": "Hello",
                "category": "Tech",
                "description": "a description long enough",
            },
            headers=headers,
        )
        self.assertEqual(response.status_code, 404)

    def test_only_creator_can_edit_or_delete(self):
        alice_email = self._register("alice")
        bob_email = self._register("bob")
        alice_headers = self._auth_header(alice_email)
        bob_headers = self._auth_header(bob_email)
        created = self._create_post(alice_headers).get_json()

        edit = self.client.patch(
            f"/api/posts/{created['id']}",
            json={
                "title": "Hijacked",
                "category": "Tech",
                "description": "a description long enough",
            },
            headers=bob_headers,
        )
        self.assertEqual(edit.status_code, 403)
        self.assertEqual(
            edit.get_json()["message"], "Unauthorized to edit this post."
        )

        delete = self.client.delete(f"/api/posts/{created['id']}", headers=bob_headers)
        self.assertEqual(delete.status_code, 403)
        self.assertEqual(delete.get_json()["message"], "Post couldn't be deleted.")

        unauthenticated = self.client.delete(f"/api/posts/{created['id']}")
        self.assertEqual(unauthenticated.status_code, 402)

        post = self.client.get(f"/api/posts/{created['id']}").get_json()
        self.assertEqual(post["title"], "Hello")
        self.assertEqual(self._uploaded_files(), [created["thumbnail"]])

    def test_delete_post_removes_record_file_and_counter(self):
        email = self._register("alice")
        user_id = self._login(email)["id"]
        headers = self._auth_header(email)
        kept = self._create_post(headers, title="kept").get_json()
        doomed = self._create_post(headers, title="doomed").get_json()
        self.assertEqual(self._post_count(user_id), 2)

        response = self.client.delete(f"/api/posts/{doomed['id']}", headers=headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.get_json(), f"Post {doomed['id']} deleted successfully."
        )

        self.assertEqual(self.client.get(f"/api/posts/{doomed['id']}").status_code, 404)
        self.assertEqual(self._uploaded_files(), [kept["thumbnail"]])
        self.assertEqual(self._post_count(user_id), 1)

    def test_delete_post_tolerates_missing_thumbnail_file(self):
        email = self._register("alice")
        user_id = self._login(email)["id"]
        headers = self._auth_header(email)
        created = self._create_post(headers).get_json()
        os.remove(os.path.join(self.upload_dir, created["thumbnail"]))

        response = self.client.delete(f"/api/posts/{created['id']}", headers=headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._post_count(user_id), 0)

    def test_uploaded_thumbnail_is_served(self):
        email = self._register("alice")
        headers = self._auth_header(email)
        created = self._create_post(headers, size=128).get_json()

        response = self.client.get(f"/uploads/{created['thumbnail']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, png_bytes(128))
        self.assertEqual(response.mimetype, "image/png")
        self.assertIn("max-age=", response.headers["Cache-Control"])
        response.close()

    def test_missing_upload_returns_json_404(self):
        response = self.client.get("/uploads/nothing-here.png")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.get_json()["message"], "Not found - /uploads/nothing-here.png"
        )

    def test_create_post_keeps_extension_of_non_ascii_name(self):
        email = self._register("alice")
        headers = self._auth_header(email)

        response = self._create_post(headers, filename="照片.png")
        self.assertEqual(response.status_code, 201)
        thumbnail = response.get_json()["thumbnail"]
        self.assertTrue(thumbnail.endswith(".png"))
        self.assertEqual(self._uploaded_files(), [thumbnail])

        served = self.client.get(f"/uploads/{thumbnail}")
        self.assertEqual(served.mimetype, "image/png")
        served.close()

    def test_delete_unknown_post_returns_404(self):
        email = self._register("alice")
        headers = self._auth_header(email)

        response = self.client.delete("/api/posts/999", headers=headers)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["message"], "Post not found.")

    def test_post_counter_never_drops_below_zero(self):
        from blog_api.repositories import user_repository

        email = self._register("alice")
        user_id = self._login(email)["id"]

        with self.app.app_context():
            updated = user_repository.adjust_post_count(user_id, -1)
            self.db.session.commit()

        self.assertEqual(updated, 0)
        self.assertEqual(self._post_count(user_id), 0)


if __name__ == "__main__":
    unittest.main()
