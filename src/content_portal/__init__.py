"""Content portal: posts, groups and the rules deciding who may see them."""
