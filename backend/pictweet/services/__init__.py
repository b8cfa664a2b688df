# Services package init
"""
PicTweet Backend — Services Layer
===================================

What:  Controller logic sitting between routes (HTTP) and the database.
How:   One stateless service per controller, exposed as a module-level
       singleton and called by the matching route module.

Service Inventory:
    - TweetService:       create tweet, feed, search, detail
    - UserService:        follow/unfollow, profiles, followers/following, likes
    - InteractionService: like/unlike, create/list comments
    - AuthService:        register, login
    - StorageService:     base64 image validation, disk storage, cleanup
"""
