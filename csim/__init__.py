from csim.cache import Cache, CacheLine, CacheSet, decodeAddress
from csim.trace import parseRecord, replay, replayFile
