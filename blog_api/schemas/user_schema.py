from blog_api.extensions.extensions import ma


class UserResponseSchema(ma.Schema):
    id = ma.Int()
    name = ma.Str()
    email = ma.Str()
    avatar = ma.Str(allow_none=True)
    posts = ma.Int()


user_schema = UserResponseSchema()
users_schema = UserResponseSchema(many=True)
