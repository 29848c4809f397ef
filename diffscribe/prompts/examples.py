"""Canned few-shot exchange shown to the model before the real diff."""

FEW_SHOT_DIFF = """diff --git a/app/models/post.py b/app/models/post.py
index 3f2a1c4..8b7e9d2 100644
--- a/app/models/post.py
+++ b/app/models/post.py
@@ -12,6 +12,12 @@ class Post(Model):
     title = CharField(max_length=200)
     body = TextField()
+    likes = IntegerField(default=0)
+
+    def like(self, user):
+        self.likes += 1
+        self.save()
"""

FEW_SHOT_ANSWER = "Add feature for a user to like a post"
