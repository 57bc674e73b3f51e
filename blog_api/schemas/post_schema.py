from blog_api.extensions.extensions import ma


class PostResponseSchema(ma.Schema):
    id = ma.Int()
    title = ma.Str()
    category = ma.Str()
    description = ma.Str()
    thumbnail = ma.Str()
    creator = ma.Int()
    created_at = ma.DateTime(data_key="createdAt")
    updated_at = ma.DateTime(data_key="updatedAt")


post_schema = PostResponseSchema()
posts_schema = PostResponseSchema(many=True)
