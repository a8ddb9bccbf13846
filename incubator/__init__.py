# Idea Incubator application package
