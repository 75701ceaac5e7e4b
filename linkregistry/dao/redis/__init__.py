from linkregistry.dao.redis.redis_key_schema import RedisKeySchema
from linkregistry.dao.redis.mixins import RedisClientMixin
from linkregistry.dao.redis.link_redis_dao import LinkRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'LinkRedisDAO',
]
